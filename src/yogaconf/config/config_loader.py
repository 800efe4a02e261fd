# src/yogaconf/config/config_loader.py


import sys
import traceback
from pathlib import Path
from typing import Any, cast

from apathetic_schema.types import ApatheticSchema_ValidationSummary
from apathetic_utils import (
    cast_hint,
    load_jsonc,
    plural,
    remove_path_in_error_message,
)

from yogaconf.logs import getAppLogger
from yogaconf.meta import PROGRAM_CONFIG

from .config_types import RawConfig
from .config_validate import validate_config


def find_config(
    config_path: Path | str | None,
    cwd: Path,
    *,
    missing_level: str = "debug",
) -> Path | None:
    """Locate a configuration file.

    missing_level: log-level for failing to find a configuration file.
    Running without one is normal (everything defaults), hence "debug".

    Search order:
      1. Explicit path from CLI (--config)
      2. Default candidates in cwd and its parents:
         {PROGRAM_CONFIG}.py, {PROGRAM_CONFIG}.jsonc, {PROGRAM_CONFIG}.json

    Returns the first matching path, or None if no config was found.
    """
    logger = getAppLogger()

    # --- 1. Explicit config path ---
    if config_path:
        config = Path(config_path).expanduser()
        if not config.is_absolute():
            config = cwd / config
        config = config.resolve()
        logger.trace(f"[find_config] Checking explicit path: {config}")
        if not config.exists():
            # Explicit path → hard failure
            xmsg = f"Specified config file not found: {config}"
            raise FileNotFoundError(xmsg)
        if config.is_dir():
            xmsg = f"Specified config path is a directory, not a file: {config}"
            raise ValueError(xmsg)
        return config

    # --- 2. Default candidate files (closest to cwd wins) ---
    current = cwd
    candidate_names = [
        f"{PROGRAM_CONFIG}.py",
        f"{PROGRAM_CONFIG}.jsonc",
        f"{PROGRAM_CONFIG}.json",
    ]
    found: list[Path] = []
    while True:
        for name in candidate_names:
            candidate = current / name
            if candidate.is_file():
                found.append(candidate)
        if found:
            break
        parent = current.parent
        if parent == current:  # Reached filesystem root
            break
        current = parent

    if not found:
        # Expected absence: soft failure (continue)
        logger.logDynamic(missing_level, f"No config file found in {cwd} or parents")
        return None

    # --- 3. Multiple matches at the same level (prefer .py > .jsonc > .json) ---
    if len(found) > 1:
        priority = {".py": 0, ".jsonc": 1, ".json": 2}
        found_sorted = sorted(found, key=lambda p: priority.get(p.suffix, 99))
        names = ", ".join(p.name for p in found_sorted)
        logger.warning(
            "Multiple config files detected (%s); using %s.",
            names,
            found_sorted[0].name,
        )
        return found_sorted[0]
    return found[0]


def load_config(config_path: Path) -> dict[str, Any] | None:
    """Load configuration data from a file.

    Supports:
      - Python configs: .py files defining `config` (or `default`)
      - JSON/JSONC configs: .json, .jsonc files

    Returns:
        The raw object defined in the config, or None for intentionally
        empty configs (e.g. empty files or `config = None`).

    Raises:
        ValueError if a .py config defines neither expected variable.
    """
    logger = getAppLogger()
    logger.trace(f"[load_config] Loading from {config_path} ({config_path.suffix})")

    # --- Python config ---
    if config_path.suffix == ".py":
        config_globals: dict[str, Any] = {}

        # Allow local imports in Python configs (e.g. from ./helpers import foo)
        parent_dir = str(config_path.parent)
        added_to_sys_path = parent_dir not in sys.path
        if added_to_sys_path:
            sys.path.insert(0, parent_dir)

        try:
            source = config_path.read_text(encoding="utf-8")
            exec(compile(source, str(config_path), "exec"), config_globals)  # noqa: S102
            logger.trace(
                f"[EXEC] globals after exec: {list(config_globals.keys())}",
            )
        except Exception as e:
            tb = traceback.format_exc()
            xmsg = (
                f"Error while executing Python config: {config_path.name}\n"
                f"{type(e).__name__}: {e}\n{tb}"
            )
            # Raise a generic runtime error for main() to catch and print cleanly
            raise RuntimeError(xmsg) from e
        finally:
            if added_to_sys_path and sys.path[0] == parent_dir:
                sys.path.pop(0)

        for key in ("config", "default"):
            if key in config_globals:
                result = config_globals[key]
                if not isinstance(result, (dict, type(None))):
                    xmsg = (
                        f"{key} in {config_path.name} must be a dict or None"
                        f", not {type(result).__name__}"
                    )
                    raise TypeError(xmsg)
                return cast("dict[str, Any] | None", result)

        xmsg = f"{config_path.name} did not define `config` or `default`"
        raise ValueError(xmsg)

    # JSONC / JSON fallback
    try:
        data = load_jsonc(config_path)
    except ValueError as e:
        clean_msg = remove_path_in_error_message(str(e), config_path)
        xmsg = (
            f"Error while loading configuration file '{config_path.name}': {clean_msg}"
        )
        raise ValueError(xmsg) from e
    if isinstance(data, list):
        xmsg = f"{config_path.name} must contain an object, not a list"
        raise TypeError(xmsg)
    return data


def _parse_legacy_db_integration(db_cfg: dict[str, Any]) -> dict[str, Any]:
    # --- historical {"schema": <blob>, "client": "<name>"} shape ---
    logger = getAppLogger()
    db = dict(db_cfg)

    if "schema" in db:
        if "schema_descriptor" in db:
            logger.warning(
                "Both `db_integration.schema` and `schema_descriptor` given;"
                " ignoring the legacy `schema`."
            )
            db.pop("schema")
        else:
            logger.warning(
                "Config key `db_integration.schema` is deprecated"
                " — treating as `schema_descriptor`."
            )
            db["schema_descriptor"] = db.pop("schema")

    client = db.get("client")
    if isinstance(client, str):
        if "client_binding_name" in db:
            logger.warning(
                "Both `db_integration.client` (a name) and `client_binding_name`"
                " given; ignoring the legacy `client`."
            )
            db.pop("client")
        else:
            logger.warning(
                "Config key `db_integration.client` was a name"
                " — treating as `client_binding_name`."
            )
            db["client_binding_name"] = db.pop("client")

    return db


def parse_config(raw_config: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize user config into canonical RawConfig shape (no filesystem work).

    Accepted forms:
      - None / {}                          → {} (all defaults)
      - {...}                              → copied as-is
      - {"db_integration": {"schema": ...}} → legacy shape, upgraded

    Unknown keys are preserved for the validation phase.
    """
    logger = getAppLogger()
    logger.trace(f"[parse_config] Parsing {type(raw_config).__name__}")

    if raw_config is None:
        return {}

    if not isinstance(raw_config, dict):  # pyright: ignore[reportUnnecessaryIsInstance]
        xmsg = f"Invalid top-level value: {type(raw_config).__name__} (expected object)"
        raise TypeError(xmsg)

    root = dict(raw_config)
    db_val = root.get("db_integration")
    if isinstance(db_val, dict):
        root["db_integration"] = _parse_legacy_db_integration(
            cast_hint(dict[str, Any], db_val)
        )
    return root


def _validation_summary(
    summary: ApatheticSchema_ValidationSummary,
    config_path: Path,
) -> None:
    """Pretty-print a validation summary using the standard log() interface."""
    logger = getAppLogger()
    mode = "strict mode" if summary.strict else "lenient mode"

    # --- Build concise counts line ---
    counts: list[str] = []
    if summary.errors:
        counts.append(f"{len(summary.errors)} error{plural(summary.errors)}")
    if summary.strict_warnings:
        counts.append(
            f"{len(summary.strict_warnings)} strict warning"
            f"{plural(summary.strict_warnings)}",
        )
    if summary.warnings:
        counts.append(
            f"{len(summary.warnings)} normal warning{plural(summary.warnings)}",
        )
    counts_msg = f"\nFound {', '.join(counts)}." if counts else ""

    # --- Header (single icon) ---
    if not summary.valid:
        logger.error(
            "Failed to validate configuration file %s (%s).%s",
            config_path.name,
            mode,
            counts_msg,
        )
    elif counts:
        logger.warning(
            "Validated configuration file %s (%s) with warnings.%s",
            config_path.name,
            mode,
            counts_msg,
        )
    else:
        logger.debug("Validated %s (%s) successfully.", config_path.name, mode)

    # --- Detailed sections ---
    if summary.errors:
        msg_summary = "\n  • ".join(summary.errors)
        logger.error("\nErrors:\n  • %s", msg_summary)
    if summary.strict_warnings:
        msg_summary = "\n  • ".join(summary.strict_warnings)
        logger.error("\nStrict warnings (treated as errors):\n  • %s", msg_summary)
    if summary.warnings:
        msg_summary = "\n  • ".join(summary.warnings)
        logger.warning("\nWarnings (non-fatal):\n  • %s", msg_summary)


def load_and_validate_config(
    *,
    config_path: Path | str | None = None,
    log_level: str | None = None,
    cwd: Path | None = None,
    strict: bool | None = None,
) -> tuple[Path, RawConfig, ApatheticSchema_ValidationSummary] | None:
    """Find, load, parse, and validate the user's configuration.

    `config_path` is an explicit config file (relative to `cwd`); `log_level`
    is the CLI override. The effective log level (CLI > env > config >
    default) is applied early, so logging can initialize as soon as possible.

    Returns:
        (config_path, raw_cfg, validation_summary)
        if a config file was found and valid, or None if no config was found.
    """
    logger = getAppLogger()
    cwd = (cwd or Path.cwd()).resolve()
    if not cwd.exists():
        logger.warning("Working directory does not exist: %s", cwd)

    # --- Find config file ---
    found_path = find_config(config_path, cwd)
    if found_path is None:
        return None

    # --- Load the raw config ---
    raw_config = load_config(found_path)

    # --- Early peek for log_level before parsing ---
    if isinstance(raw_config, dict):
        raw_log_level = raw_config.get("log_level")
        if isinstance(raw_log_level, str) and raw_log_level:
            if log_level:
                logger.setLevel(log_level.upper())
            else:
                logger.setLevel(
                    logger.determineLogLevel(root_log_level=raw_log_level)
                )

    # --- Normalize shape ---
    try:
        parsed_cfg = parse_config(raw_config)
    except TypeError as e:
        xmsg = f"Could not parse config {found_path.name}: {e}"
        raise TypeError(xmsg) from e

    # --- Validate schema ---
    validation_result = validate_config(parsed_cfg, strict=strict)
    _validation_summary(validation_result, found_path)
    if not validation_result.valid:
        xmsg = f"Configuration file {found_path.name} contains validation errors."
        exception = ValueError(xmsg)
        exception.silent = True  # type: ignore[attr-defined]
        exception.data = validation_result  # type: ignore[attr-defined]
        raise exception

    # --- Upgrade to RawConfig type ---
    raw_cfg: RawConfig = cast_hint(RawConfig, parsed_cfg)
    return found_path, raw_cfg, validation_result
