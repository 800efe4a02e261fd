# src/yogaconf/config/config_resolve.py


import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from apathetic_utils import cast_hint

from yogaconf.constants import (
    DEFAULT_BUILD_PATH,
    DEFAULT_CONTEXT_PATH,
    DEFAULT_DB_CLIENT_BINDING_NAME,
    DEFAULT_DB_CLIENT_EXPORT,
    DEFAULT_DB_CLIENT_PATH,
    DEFAULT_DB_SCHEMA_DESCRIPTOR_EXPORT,
    DEFAULT_DB_SCHEMA_DESCRIPTOR_PATH,
    DEFAULT_EJECT_FILE_PATH,
    DEFAULT_RESOLVERS_PATH,
    DEFAULT_SCHEMA_PATH,
    DEFAULT_TYPEGEN_PATH,
)
from yogaconf.logs import getAppLogger
from yogaconf.module_loader import ModuleLoader
from yogaconf.utils import display_path, path_or_default, value_or_default

from .config_types import (
    AuxiliaryLoader,
    DbDisabled,
    DbEnabledDefault,
    DbEnabledWithOverrides,
    DbIntegrationConfig,
    DbIntegrationResolved,
    DbIntegrationState,
    LoadRequest,
    OutputConfig,
    OutputResolved,
    ProjectFacts,
    RawConfig,
    ResolvedConfig,
)
from .config_loader import load_and_validate_config
from .config_project import (
    find_project_descriptor,
    make_db_probe,
    make_project_facts,
    parse_project_descriptor,
)
from .config_validate import (
    ConfigValidationError,
    PathExists,
    optional_path,
    required_path,
)


DbProbe = Callable[[ProjectFacts], bool]


def _not_found(field: str, shown: str) -> str:
    return f"Could not find a valid `{field}` at {shown}"


# --------------------------------------------------------------------------- #
# field resolvers
# --------------------------------------------------------------------------- #


def resolve_context_path(
    raw: RawConfig,
    project_dir: Path,
    *,
    exists: PathExists = os.path.exists,
) -> Path | None:
    value = raw.get("context_path")
    path = path_or_default(project_dir, value, DEFAULT_CONTEXT_PATH)
    shown = display_path(path, value, DEFAULT_CONTEXT_PATH)
    return optional_path(
        path, value, _not_found("context_path", shown), exists=exists
    )


def resolve_resolvers_path(
    raw: RawConfig,
    project_dir: Path,
    *,
    exists: PathExists = os.path.exists,
) -> Path:
    value = raw.get("resolvers_path")
    path = path_or_default(project_dir, value, DEFAULT_RESOLVERS_PATH)
    shown = display_path(path, value, DEFAULT_RESOLVERS_PATH)
    return required_path(path, _not_found("resolvers_path", shown), exists=exists)


def resolve_eject_file_path(
    raw: RawConfig,
    project_dir: Path,
    *,
    exists: PathExists = os.path.exists,
) -> Path | None:
    value = raw.get("eject_file_path")
    path = path_or_default(project_dir, value, DEFAULT_EJECT_FILE_PATH)
    shown = display_path(path, value, DEFAULT_EJECT_FILE_PATH)
    return optional_path(
        path, value, _not_found("eject_file_path", shown), exists=exists
    )


def resolve_output(
    output: OutputConfig | None,
    project_dir: Path,
    build_output_dir: Path | None = None,
) -> OutputResolved:
    """Output paths are never checked: they are written, not read.

    The project descriptor's outDir wins over the configured build path.
    """
    output = output or {}
    if build_output_dir is not None:
        build_path = Path(os.path.abspath(build_output_dir))
    else:
        build_path = path_or_default(
            project_dir, output.get("build_path"), DEFAULT_BUILD_PATH
        )
    return OutputResolved(
        typegen_path=path_or_default(
            project_dir, output.get("typegen_path"), DEFAULT_TYPEGEN_PATH
        ),
        schema_path=path_or_default(
            project_dir, output.get("schema_path"), DEFAULT_SCHEMA_PATH
        ),
        build_path=build_path,
    )


# --------------------------------------------------------------------------- #
# database integration
# --------------------------------------------------------------------------- #


def classify_db_integration(
    raw: RawConfig,
    facts: ProjectFacts,
    db_probe: DbProbe,
) -> DbIntegrationState:
    """Turn the raw `db_integration` value into one of three trigger states.

    The probe only runs when the key is absent.
    """
    logger = getAppLogger()

    if "db_integration" not in raw:
        if db_probe(facts):
            logger.debug("Database integration auto-detected")
            return DbEnabledDefault(auto_detected=True)
        logger.trace("[classify_db_integration] No descriptor, integration off")
        return DbDisabled()

    value: Any = raw["db_integration"]
    if value is True:
        return DbEnabledDefault()
    if isinstance(value, dict):
        return DbEnabledWithOverrides(fields=cast_hint(DbIntegrationConfig, value))

    xmsg = (
        "`db_integration` must be true or an object, "
        f"not {type(value).__name__}"
    )
    raise ConfigValidationError(xmsg)


def resolve_db_integration(
    state: DbIntegrationState,
    project_dir: Path,
    out_dir: Path,
    *,
    loader: AuxiliaryLoader,
    exists: PathExists = os.path.exists,
) -> DbIntegrationResolved | None:
    """Resolve an enabled integration: check paths first, then load.

    All existence checks run before the single loader call, which requests
    the client export before the schema descriptor export.
    """
    if isinstance(state, DbDisabled):
        return None

    logger = getAppLogger()
    fields: DbIntegrationConfig = (
        state.fields if isinstance(state, DbEnabledWithOverrides) else {}
    )

    # --- client binding ---
    has_inline_client = "client" in fields
    client_value = fields.get("client_path")
    client_path: Path | None = None
    if not has_inline_client or client_value:
        client_path = path_or_default(
            project_dir, client_value, DEFAULT_DB_CLIENT_PATH
        )
        shown = display_path(client_path, client_value, DEFAULT_DB_CLIENT_PATH)
        client_path = required_path(
            client_path, _not_found("db_integration.client_path", shown), exists=exists
        )

    # --- schema descriptor ---
    has_inline_descriptor = "schema_descriptor" in fields
    descriptor_value = fields.get("schema_descriptor_path")
    descriptor_path: Path | None = None
    if not has_inline_descriptor or descriptor_value:
        descriptor_path = path_or_default(
            project_dir, descriptor_value, DEFAULT_DB_SCHEMA_DESCRIPTOR_PATH
        )
        shown = display_path(
            descriptor_path, descriptor_value, DEFAULT_DB_SCHEMA_DESCRIPTOR_PATH
        )
        descriptor_path = required_path(
            descriptor_path,
            _not_found("db_integration.schema_descriptor_path", shown),
            exists=exists,
        )

    # --- loads (client first, then descriptor) ---
    requests: list[LoadRequest] = []
    if not has_inline_client and client_path is not None:
        requests.append(LoadRequest(client_path, DEFAULT_DB_CLIENT_EXPORT))
    if not has_inline_descriptor and descriptor_path is not None:
        requests.append(
            LoadRequest(descriptor_path, DEFAULT_DB_SCHEMA_DESCRIPTOR_EXPORT)
        )

    loaded: list[Any] = []
    if requests:
        logger.trace(
            f"[resolve_db_integration] Loading {[str(r.path) for r in requests]}"
        )
        loaded = loader.load(requests, project_dir=project_dir, out_dir=out_dir)
        if len(loaded) != len(requests):
            xmsg = (
                f"Loader returned {len(loaded)} value(s) "
                f"for {len(requests)} request(s)"
            )
            raise RuntimeError(xmsg)
    results = iter(loaded)

    client: Any = fields["client"] if has_inline_client else next(results)
    descriptor: Any = (
        fields["schema_descriptor"] if has_inline_descriptor else next(results)
    )

    return DbIntegrationResolved(
        client_path=client_path,
        client=client,
        schema_descriptor_path=descriptor_path,
        schema_descriptor=descriptor,
        client_binding_name=value_or_default(
            fields.get("client_binding_name"), DEFAULT_DB_CLIENT_BINDING_NAME
        ),
    )


# --------------------------------------------------------------------------- #
# main entry
# --------------------------------------------------------------------------- #


def normalize_config(
    raw: RawConfig | None,
    facts: ProjectFacts,
    *,
    loader: AuxiliaryLoader | None = None,
    exists: PathExists | None = None,
    db_probe: DbProbe | None = None,
) -> ResolvedConfig:
    """Resolve a partial user config into a fully populated one.

    `raw` is never mutated. Raises ConfigValidationError (before returning
    anything) when a path fails its existence policy.
    """
    logger = getAppLogger()
    raw = raw or {}
    exists = exists or os.path.exists
    loader = loader or ModuleLoader()
    db_probe = db_probe or make_db_probe(exists)

    project_dir = Path(os.path.abspath(facts.project_dir))
    logger.trace(f"[normalize_config] Resolving against {project_dir}")

    context_path = resolve_context_path(raw, project_dir, exists=exists)
    resolvers_path = resolve_resolvers_path(raw, project_dir, exists=exists)
    eject_file_path = resolve_eject_file_path(raw, project_dir, exists=exists)
    output = resolve_output(raw.get("output"), project_dir, facts.build_output_dir)

    state = classify_db_integration(raw, facts, db_probe)
    db_integration = resolve_db_integration(
        state,
        project_dir,
        output["build_path"],
        loader=loader,
        exists=exists,
    )

    return ResolvedConfig(
        context_path=context_path,
        resolvers_path=resolvers_path,
        eject_file_path=eject_file_path,
        output=output,
        db_integration=db_integration,
    )


def to_raw_config(resolved: ResolvedConfig) -> RawConfig:
    """Re-derive a raw config that resolves back to `resolved`.

    Absolute paths are kept as-is; joining them onto any root is a no-op.
    """
    raw = RawConfig(
        resolvers_path=str(resolved["resolvers_path"]),
        output=OutputConfig(
            typegen_path=str(resolved["output"]["typegen_path"]),
            schema_path=str(resolved["output"]["schema_path"]),
            build_path=str(resolved["output"]["build_path"]),
        ),
    )
    if resolved["context_path"] is not None:
        raw["context_path"] = str(resolved["context_path"])
    if resolved["eject_file_path"] is not None:
        raw["eject_file_path"] = str(resolved["eject_file_path"])

    db = resolved["db_integration"]
    if db is not None:
        db_raw = DbIntegrationConfig(
            client=db["client"],
            schema_descriptor=db["schema_descriptor"],
            client_binding_name=db["client_binding_name"],
        )
        if db["client_path"] is not None:
            db_raw["client_path"] = str(db["client_path"])
        if db["schema_descriptor_path"] is not None:
            db_raw["schema_descriptor_path"] = str(db["schema_descriptor_path"])
        raw["db_integration"] = db_raw
    return raw


# --------------------------------------------------------------------------- #
# orchestration
# --------------------------------------------------------------------------- #


@dataclass
class ImportedConfig:
    config: ResolvedConfig
    raw_config: RawConfig
    config_path: Path | None  # None when running on defaults only
    project_dir: Path
    root_dir: Path
    project_descriptor_path: Path
    # where the db schema descriptor comes from, if the integration is on
    schema_descriptor_path: Path | None


def import_config(
    cwd: Path,
    *,
    config_path: Path | None = None,
    log_level: str | None = None,
    loader: AuxiliaryLoader | None = None,
    strict: bool | None = None,
) -> ImportedConfig:
    """Locate the project, load the optional config file, and resolve it.

    Without a config file everything falls back to defaults and the
    database integration is auto-detected. `log_level` is the CLI override;
    it wins over the config file's `log_level`.
    """
    logger = getAppLogger()

    descriptor = parse_project_descriptor(find_project_descriptor(cwd))
    facts = make_project_facts(descriptor, cwd)
    logger.debug("Project root: %s", descriptor.project_dir)

    loaded = load_and_validate_config(
        config_path=config_path,
        log_level=log_level,
        cwd=cwd,
        strict=strict,
    )
    found_path: Path | None = None
    raw: RawConfig = {}
    if loaded is not None:
        found_path, raw, _summary = loaded

    resolved = normalize_config(raw, facts, loader=loader)
    db = resolved["db_integration"]
    return ImportedConfig(
        config=resolved,
        raw_config=raw,
        config_path=found_path,
        project_dir=descriptor.project_dir,
        root_dir=descriptor.root_dir,
        project_descriptor_path=descriptor.path,
        schema_descriptor_path=db["schema_descriptor_path"] if db else None,
    )
