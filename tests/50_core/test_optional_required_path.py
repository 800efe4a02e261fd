# tests/50_core/test_optional_required_path.py

from pathlib import Path

import pytest

import yogaconf.config.config_validate as mod_validate


def test_optional_path_returns_existing_path(tmp_path: Path) -> None:
    # --- setup ---
    target = tmp_path / "context.ts"
    target.write_text("")

    # --- execute ---
    result = mod_validate.optional_path(target, None, "unused")

    # --- verify ---
    assert result == target


def test_optional_path_missing_default_is_none(tmp_path: Path) -> None:
    """No user value: a missing path just means the feature is unused."""
    result = mod_validate.optional_path(tmp_path / "nope.ts", None, "unused")
    assert result is None


def test_optional_path_missing_empty_value_is_none(tmp_path: Path) -> None:
    result = mod_validate.optional_path(tmp_path / "nope.ts", "", "unused")
    assert result is None


def test_optional_path_missing_explicit_value_raises(tmp_path: Path) -> None:
    """An explicit value is honored or rejected, never silently dropped."""
    with pytest.raises(mod_validate.ConfigValidationError, match="bad context"):
        mod_validate.optional_path(tmp_path / "nope.ts", "./nope.ts", "bad context")


def test_required_path_returns_existing_directory(tmp_path: Path) -> None:
    result = mod_validate.required_path(tmp_path, "unused")
    assert result == tmp_path


def test_required_path_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(mod_validate.ConfigValidationError, match="resolvers"):
        mod_validate.required_path(tmp_path / "graphql", "no resolvers")


def test_existence_oracle_is_injected() -> None:
    """Checks go through the supplied oracle, not the real filesystem."""
    # --- setup ---
    seen: list[Path] = []

    def exists(path: Path) -> bool:
        seen.append(path)
        return True

    # --- execute ---
    result = mod_validate.required_path(Path("/nowhere/x"), "msg", exists=exists)

    # --- verify ---
    assert result == Path("/nowhere/x")
    assert seen == [Path("/nowhere/x")]


def test_config_validation_error_is_value_error() -> None:
    assert issubclass(mod_validate.ConfigValidationError, ValueError)
