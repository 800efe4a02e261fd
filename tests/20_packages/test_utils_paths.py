# tests/20_packages/test_utils_paths.py


from pathlib import Path

import pytest

import yogaconf.utils as mod_utils


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("./custom.ts", "./custom.ts"),
        (None, "./default.ts"),
        ("", "./default.ts"),
    ],
)
def test_value_or_default(value: str | None, expected: str) -> None:
    """Empty strings count as missing and fall back to the default."""
    assert mod_utils.value_or_default(value, "./default.ts") == expected


def test_path_or_default_joins_default_onto_root() -> None:
    # --- execute ---
    result = mod_utils.path_or_default(Path("/proj"), None, "./src/context.ts")

    # --- verify ---
    assert result == Path("/proj/src/context.ts")
    assert result.is_absolute()


def test_path_or_default_prefers_user_value() -> None:
    result = mod_utils.path_or_default(Path("/proj"), "./lib/ctx.ts", "./src/ctx.ts")
    assert result == Path("/proj/lib/ctx.ts")


def test_path_or_default_normalizes_dot_segments() -> None:
    """`./`, `../` and trailing separators are collapsed by the join."""
    # --- execute ---
    up = mod_utils.path_or_default(Path("/proj/app"), "../shared/ctx.ts", "x")
    trailing = mod_utils.path_or_default(Path("/proj"), "./src/graphql/", "x")

    # --- verify ---
    assert up == Path("/proj/shared/ctx.ts")
    assert trailing == Path("/proj/src/graphql")


def test_path_or_default_absolute_value_replaces_root() -> None:
    result = mod_utils.path_or_default(Path("/proj"), "/elsewhere/ctx.ts", "x")
    assert result == Path("/elsewhere/ctx.ts")


def test_display_path_keeps_directory_separator() -> None:
    """Directory-style inputs are echoed back with their trailing slash."""
    # --- setup ---
    path = mod_utils.path_or_default(Path("/proj"), None, "./src/graphql/")

    # --- execute ---
    shown = mod_utils.display_path(path, None, "./src/graphql/")

    # --- verify ---
    assert shown == "/proj/src/graphql/"


def test_display_path_plain_file() -> None:
    path = Path("/proj/src/context.ts")
    assert mod_utils.display_path(path, "./src/context.ts", "x") == str(path)


def test_path_or_default_relative_root_becomes_absolute(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    # --- setup ---
    monkeypatch.chdir(tmp_path)

    # --- execute ---
    result = mod_utils.path_or_default("proj", None, "./src/context.ts")

    # --- verify ---
    assert result.is_absolute()
    assert result == tmp_path / "proj" / "src" / "context.ts"
