# src/yogaconf/config/config_validate.py


import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from apathetic_schema import (
    check_schema_conformance,
    collect_msg,
    flush_schema_aggregators,
    warn_keys_once,
)
from apathetic_schema.types import (
    ApatheticSchema_SchemaErrorAggregator,
    ApatheticSchema_ValidationSummary,
)
from apathetic_utils import cast_hint, schema_from_typeddict

from yogaconf.constants import DEFAULT_STRICT_CONFIG
from yogaconf.logs import getAppLogger

from .config_types import DbIntegrationConfig, RawConfig


PathExists = Callable[[Path], bool]


class ConfigValidationError(ValueError):
    """A configured (or default) path does not satisfy its field's policy."""


# --------------------------------------------------------------------------- #
# existence policies
# --------------------------------------------------------------------------- #


def optional_path(
    path: Path,
    user_value: str | None,
    error_message: str,
    *,
    exists: PathExists = os.path.exists,
) -> Path | None:
    """Optional input path.

    A missing path just means the feature is unused, unless the user asked
    for it explicitly: explicit input is honored or rejected, never dropped.
    """
    if not exists(path):
        if user_value:
            raise ConfigValidationError(error_message)
        return None
    return path


def required_path(
    path: Path,
    error_message: str,
    *,
    exists: PathExists = os.path.exists,
) -> Path:
    """Required path: must exist whether it came from input or a default."""
    if not exists(path):
        raise ConfigValidationError(error_message)
    return path


# --------------------------------------------------------------------------- #
# schema validation
# --------------------------------------------------------------------------- #

CAMEL_CASE_KEYS = {
    "contextPath",
    "resolversPath",
    "ejectFilePath",
    "dbIntegration",
    "prisma",
}
CAMEL_CASE_MSG = (
    "Ignored {keys} keys {ctx}: config keys are snake_case here "
    "(e.g. `context_path`, `db_integration`)."
)

FIELD_EXAMPLES: dict[str, str] = {
    "root.context_path": '"./src/context.ts"',
    "root.resolvers_path": '"./src/graphql/"',
    "root.eject_file_path": '"./src/index.ts"',
    "root.output.*": '"./yoga/nexus.ts"',
    "root.db_integration": 'true or {"client_path": "./yoga/prisma-client/index.ts"}',
    "root.db_integration.client_binding_name": '"prisma"',
    "root.log_level": '"debug"',
    "root.strict_config": "true",
}


def _set_valid_and_return(
    *,
    summary: ApatheticSchema_ValidationSummary,  # modified
    agg: ApatheticSchema_SchemaErrorAggregator,  # modified
) -> ApatheticSchema_ValidationSummary:
    flush_schema_aggregators(summary=summary, agg=agg)
    summary.valid = not summary.errors and not summary.strict_warnings
    return summary


def _validate_db_integration(
    db_cfg: dict[str, Any],
    *,
    strict_config: bool,
    summary: ApatheticSchema_ValidationSummary,  # modified
) -> None:
    logger = getAppLogger()
    logger.trace(f"[validate_db_integration] Validating {len(db_cfg)} keys")

    ok = check_schema_conformance(
        db_cfg,
        schema_from_typeddict(DbIntegrationConfig),
        "in `db_integration`",
        strict_config=strict_config,
        summary=summary,
        base_path="root.db_integration",
        field_examples=FIELD_EXAMPLES,
    )
    if not ok and not (summary.errors or summary.strict_warnings):
        collect_msg(
            "`db_integration` configuration invalid.",
            strict=True,
            summary=summary,
            is_error=True,
        )


def validate_config(
    parsed_cfg: dict[str, Any],
    *,
    strict: bool | None = None,
) -> ApatheticSchema_ValidationSummary:
    """Validate a parsed user config against the RawConfig schema.

    strict=True  →  warnings become fatal, but still listed separately
    strict=False →  warnings remain non-fatal
    strict=None  →  use the `strict_config` key, then DEFAULT_STRICT_CONFIG

    Existence of paths is not checked here; that happens during resolution.
    """
    logger = getAppLogger()
    logger.trace(f"[validate_config] Starting validation (strict={strict})")

    strict_config = DEFAULT_STRICT_CONFIG
    strict_from_cfg: Any = parsed_cfg.get("strict_config")
    if strict is not None:
        strict_config = strict
    elif isinstance(strict_from_cfg, bool):
        strict_config = strict_from_cfg

    summary = ApatheticSchema_ValidationSummary(
        valid=True,
        errors=[],
        strict_warnings=[],
        warnings=[],
        strict=strict_config,
    )
    agg: ApatheticSchema_SchemaErrorAggregator = {}

    _ok, prewarn = warn_keys_once(
        "camel-case",
        CAMEL_CASE_KEYS,
        parsed_cfg,
        "in top-level configuration",
        CAMEL_CASE_MSG,
        strict_config=strict_config,
        summary=summary,
        agg=agg,
    )

    # db_integration is a union (True | object); its object form is
    # validated separately below so unknown keys inside it are reported too.
    ok = check_schema_conformance(
        parsed_cfg,
        schema_from_typeddict(RawConfig),
        "in top-level configuration",
        strict_config=strict_config,
        summary=summary,
        prewarn=prewarn,
        ignore_keys={"db_integration"},
        base_path="root",
        field_examples=FIELD_EXAMPLES,
    )
    if not ok and not (summary.errors or summary.strict_warnings):
        collect_msg(
            "Top-level configuration invalid.",
            strict=True,
            summary=summary,
            is_error=True,
        )

    if "db_integration" in parsed_cfg:
        db_val: Any = parsed_cfg["db_integration"]
        if isinstance(db_val, dict):
            _validate_db_integration(
                cast_hint(dict[str, Any], db_val),
                strict_config=strict_config,
                summary=summary,
            )
        elif db_val is not True:
            collect_msg(
                "in top-level configuration: key `db_integration` expected "
                f"true or an object (e.g. {FIELD_EXAMPLES['root.db_integration']}),"
                f" got {type(db_val).__name__}",
                strict=True,
                summary=summary,
                is_error=True,
            )

    return _set_valid_and_return(summary=summary, agg=agg)
