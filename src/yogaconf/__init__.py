# src/yogaconf/__init__.py

"""Yogaconf — resolve a yoga project's configuration.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use, custom integrations, or plugins.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - main()              → CLI entrypoint
    - normalize_config()  → Resolve a raw config against project facts
    - import_config()     → Find the project and config file, then resolve
    - get_metadata()      → Retrieve version info
"""

from .cli import main, render_config
from .config import (
    ConfigValidationError,
    DbDisabled,
    DbEnabledDefault,
    DbEnabledWithOverrides,
    DbIntegrationResolved,
    ImportedConfig,
    LoadRequest,
    ProjectDescriptor,
    ProjectFacts,
    RawConfig,
    ResolvedConfig,
    find_config,
    find_db_descriptor,
    find_project_descriptor,
    import_config,
    load_and_validate_config,
    load_config,
    normalize_config,
    parse_config,
    parse_project_descriptor,
    validate_config,
)
from .constants import (
    DEFAULT_ENV_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_STRICT_CONFIG,
)
from .logs import getAppLogger
from .meta import (
    PROGRAM_CONFIG,
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
    get_metadata,
)
from .module_loader import ModuleLoader, ModuleLoadError
from .utils import display_path, path_or_default, value_or_default


__all__ = [  # noqa: RUF022
    # cli
    "main",
    "render_config",
    # config
    "ConfigValidationError",
    "DbDisabled",
    "DbEnabledDefault",
    "DbEnabledWithOverrides",
    "DbIntegrationResolved",
    "ImportedConfig",
    "LoadRequest",
    "ProjectDescriptor",
    "ProjectFacts",
    "RawConfig",
    "ResolvedConfig",
    "find_config",
    "find_db_descriptor",
    "find_project_descriptor",
    "import_config",
    "load_and_validate_config",
    "load_config",
    "normalize_config",
    "parse_config",
    "parse_project_descriptor",
    "validate_config",
    # constants
    "DEFAULT_ENV_LOG_LEVEL",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_STRICT_CONFIG",
    # logs
    "getAppLogger",
    # meta
    "PROGRAM_CONFIG",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    "Metadata",
    "get_metadata",
    # module_loader
    "ModuleLoader",
    "ModuleLoadError",
    # utils
    "display_path",
    "path_or_default",
    "value_or_default",
]
