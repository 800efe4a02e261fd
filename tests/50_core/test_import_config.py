# tests/50_core/test_import_config.py
"""Tests for import_config against projects on disk."""

from pathlib import Path

import pytest

import yogaconf.config.config_resolve as mod_resolve
import yogaconf.config.config_validate as mod_validate
import yogaconf.meta as mod_meta
from tests.utils import FakeLoader, make_project, write_config_file


def test_import_config_defaults_only(tmp_path: Path) -> None:
    # --- setup ---
    root = make_project(tmp_path / "app", context=True)

    # --- execute ---
    imported = mod_resolve.import_config(root)

    # --- verify ---
    assert imported.config_path is None
    assert imported.raw_config == {}
    assert imported.project_dir == root.resolve()
    assert imported.root_dir == (root / "src").resolve()
    assert imported.project_descriptor_path == (root / "tsconfig.json").resolve()
    cfg = imported.config
    assert cfg["resolvers_path"] == (root / "src" / "graphql").resolve()
    assert cfg["context_path"] == (root / "src" / "context.ts").resolve()
    assert cfg["output"]["build_path"] == (root / "dist").resolve()
    assert cfg["db_integration"] is None
    assert imported.schema_descriptor_path is None


def test_import_config_from_nested_directory(tmp_path: Path) -> None:
    """The project is found by walking up from the working directory."""
    # --- setup ---
    root = make_project(tmp_path / "app")
    nested = root / "src" / "graphql"

    # --- execute ---
    imported = mod_resolve.import_config(nested)

    # --- verify ---
    assert imported.project_dir == root.resolve()


def test_import_config_uses_config_file(tmp_path: Path) -> None:
    # --- setup ---
    root = make_project(tmp_path / "app", resolvers=False)
    (root / "api").mkdir()
    cfg_path = write_config_file(
        root / f"{mod_meta.PROGRAM_CONFIG}.json",
        {"resolvers_path": "./api/"},
    )

    # --- execute ---
    imported = mod_resolve.import_config(root)

    # --- verify ---
    assert imported.config_path == cfg_path.resolve()
    assert imported.raw_config == {"resolvers_path": "./api/"}
    assert imported.config["resolvers_path"] == (root / "api").resolve()


def test_import_config_loads_db_modules(tmp_path: Path) -> None:
    """A prisma.yml turns the integration on and the Python siblings load."""
    # --- setup ---
    root = make_project(
        tmp_path / "app",
        db_descriptor=True,
        db_client=True,
        db_schema_descriptor=True,
    )

    # --- execute ---
    imported = mod_resolve.import_config(root)

    # --- verify ---
    db = imported.config["db_integration"]
    assert db is not None
    assert db["client"] == {"kind": "client"}
    assert db["schema_descriptor"]["uniqueFieldsByModel"] == {}
    assert db["client_binding_name"] == "prisma"
    assert imported.schema_descriptor_path == db["schema_descriptor_path"]


def test_import_config_accepts_custom_loader(tmp_path: Path) -> None:
    # --- setup ---
    root = make_project(
        tmp_path / "app",
        db_descriptor=True,
        db_client=True,
        db_schema_descriptor=True,
    )
    loader = FakeLoader({"prisma": "CLIENT", "default": "DESC"})

    # --- execute ---
    imported = mod_resolve.import_config(root, loader=loader)

    # --- verify ---
    db = imported.config["db_integration"]
    assert db is not None
    assert db["client"] == "CLIENT"
    assert db["schema_descriptor"] == "DESC"


def test_import_config_missing_resolvers_raises(tmp_path: Path) -> None:
    root = make_project(tmp_path / "app", resolvers=False)

    with pytest.raises(mod_validate.ConfigValidationError, match="resolvers_path"):
        mod_resolve.import_config(root)


def test_import_config_without_tsconfig_raises(tmp_path: Path) -> None:
    root = make_project(tmp_path / "app", tsconfig=False)

    with pytest.raises(FileNotFoundError, match="tsconfig.json"):
        mod_resolve.import_config(root)


def test_import_config_explicit_config_path(tmp_path: Path) -> None:
    # --- setup ---
    root = make_project(tmp_path / "app")
    cfg_path = write_config_file(
        tmp_path / "elsewhere.jsonc", {"output": {"typegen_path": "./gen.ts"}}
    )

    # --- execute ---
    imported = mod_resolve.import_config(root, config_path=cfg_path)

    # --- verify ---
    assert imported.config_path == cfg_path.resolve()
    assert imported.config["output"]["typegen_path"] == (root / "gen.ts").resolve()
