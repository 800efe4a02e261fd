# src/yogaconf/config/__init__.py

"""Configuration handling for yogaconf.

This module provides configuration loading, parsing, validation, and resolution.
"""

from .config_loader import (
    find_config,
    load_and_validate_config,
    load_config,
    parse_config,
)
from .config_project import (
    ProjectDescriptor,
    find_db_descriptor,
    find_project_descriptor,
    make_db_probe,
    make_project_facts,
    parse_project_descriptor,
)
from .config_resolve import (
    ImportedConfig,
    classify_db_integration,
    import_config,
    normalize_config,
    resolve_context_path,
    resolve_db_integration,
    resolve_eject_file_path,
    resolve_output,
    resolve_resolvers_path,
    to_raw_config,
)
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
from .config_validate import (
    ConfigValidationError,
    optional_path,
    required_path,
    validate_config,
)


__all__ = [  # noqa: RUF022
    # config_loader
    "find_config",
    "load_and_validate_config",
    "load_config",
    "parse_config",
    # config_project
    "ProjectDescriptor",
    "find_db_descriptor",
    "find_project_descriptor",
    "make_db_probe",
    "make_project_facts",
    "parse_project_descriptor",
    # config_resolve
    "ImportedConfig",
    "classify_db_integration",
    "import_config",
    "normalize_config",
    "resolve_context_path",
    "resolve_db_integration",
    "resolve_eject_file_path",
    "resolve_output",
    "resolve_resolvers_path",
    "to_raw_config",
    # config_types
    "AuxiliaryLoader",
    "DbDisabled",
    "DbEnabledDefault",
    "DbEnabledWithOverrides",
    "DbIntegrationConfig",
    "DbIntegrationResolved",
    "DbIntegrationState",
    "LoadRequest",
    "OutputConfig",
    "OutputResolved",
    "ProjectFacts",
    "RawConfig",
    "ResolvedConfig",
    # config_validate
    "ConfigValidationError",
    "optional_path",
    "required_path",
    "validate_config",
]
