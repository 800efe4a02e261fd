# src/yogaconf/config/config_types.py


from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, NamedTuple, Protocol, TypedDict


# --------------------------------------------------------------------------- #
# user input
# --------------------------------------------------------------------------- #


class OutputConfig(TypedDict, total=False):
    typegen_path: str  # generated nexus typings
    schema_path: str  # generated SDL
    build_path: str  # ignored when the project descriptor defines outDir


class DbIntegrationConfig(TypedDict, total=False):
    client_path: str  # module exporting the database client
    client: Any  # precomputed client binding, skips loading client_path
    schema_descriptor_path: str  # module whose default export describes the schema
    schema_descriptor: Any  # inline descriptor, skips loading from disk
    client_binding_name: str  # name the client is exposed under in the context


class RawConfig(TypedDict, total=False):
    context_path: str
    resolvers_path: str
    eject_file_path: str
    output: OutputConfig
    # True  → enabled with all defaults
    # dict  → enabled, named fields override the defaults
    # unset → enabled only if a db descriptor (prisma.yml) is found
    db_integration: Literal[True] | DbIntegrationConfig

    # runtime behavior
    log_level: str
    strict_config: bool


# --------------------------------------------------------------------------- #
# resolved output
# --------------------------------------------------------------------------- #


class OutputResolved(TypedDict):
    typegen_path: Path
    schema_path: Path
    build_path: Path


class DbIntegrationResolved(TypedDict):
    client_path: Path | None  # None only when the client was given inline
    client: Any
    schema_descriptor_path: Path | None  # None when the descriptor was inline
    schema_descriptor: Any
    client_binding_name: str


class ResolvedConfig(TypedDict):
    context_path: Path | None
    resolvers_path: Path
    eject_file_path: Path | None
    output: OutputResolved
    db_integration: DbIntegrationResolved | None


# --------------------------------------------------------------------------- #
# database integration trigger states
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class DbDisabled:
    """No explicit setting and no db descriptor on disk."""


@dataclass(frozen=True)
class DbEnabledDefault:
    """`db_integration: True`, or auto-detected from a db descriptor."""

    auto_detected: bool = False


@dataclass(frozen=True)
class DbEnabledWithOverrides:
    """`db_integration: {...}`; unspecified fields fall back to defaults."""

    fields: DbIntegrationConfig = field(
        default_factory=lambda: DbIntegrationConfig()
    )


DbIntegrationState = DbDisabled | DbEnabledDefault | DbEnabledWithOverrides


# --------------------------------------------------------------------------- #
# ambient project state and collaborators
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class ProjectFacts:
    project_dir: Path  # absolute
    build_output_dir: Path | None = None  # outDir from the project descriptor
    cwd: Path | None = None  # working directory for db descriptor fallback


class LoadRequest(NamedTuple):
    path: Path
    export_name: str


class AuxiliaryLoader(Protocol):
    def load(
        self,
        requests: Sequence[LoadRequest],
        *,
        project_dir: Path,
        out_dir: Path,
    ) -> list[Any]:
        """Return the requested exports, in request order."""
        ...
