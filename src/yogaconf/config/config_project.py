# src/yogaconf/config/config_project.py
"""Discovery of the project root and the database descriptor."""

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from apathetic_utils import cast_hint, load_jsonc, remove_path_in_error_message

from yogaconf.constants import (
    DB_DESCRIPTOR_FALLBACK_DIR,
    DB_DESCRIPTOR_NAME,
    PROJECT_DESCRIPTOR_NAME,
)
from yogaconf.logs import getAppLogger

from .config_types import ProjectFacts


@dataclass(frozen=True)
class ProjectDescriptor:
    path: Path  # tsconfig.json itself
    project_dir: Path  # directory holding the descriptor
    root_dir: Path  # compilerOptions.rootDir, absolute
    out_dir: Path  # compilerOptions.outDir, absolute


def find_project_descriptor(cwd: Path) -> Path:
    """Walk up from `cwd` to the closest project descriptor.

    Raises FileNotFoundError when none exists up to the filesystem root.
    """
    logger = getAppLogger()
    current = cwd.resolve()
    while True:
        candidate = current / PROJECT_DESCRIPTOR_NAME
        logger.trace(f"[find_project_descriptor] Checking {candidate}")
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:  # Reached filesystem root
            break
        current = parent

    xmsg = f"Could not find a valid '{PROJECT_DESCRIPTOR_NAME}' in {cwd} or parents"
    raise FileNotFoundError(xmsg)


def parse_project_descriptor(descriptor_path: Path) -> ProjectDescriptor:
    """Read `compilerOptions.rootDir` and `outDir` from a tsconfig.json.

    Both are required and resolved against the descriptor's directory.
    """
    logger = getAppLogger()
    logger.trace(f"[parse_project_descriptor] Reading {descriptor_path}")

    try:
        data = load_jsonc(descriptor_path)
    except ValueError as e:
        clean_msg = remove_path_in_error_message(str(e), descriptor_path)
        xmsg = f"Error while loading '{descriptor_path.name}': {clean_msg}"
        raise ValueError(xmsg) from e

    if not isinstance(data, dict):
        data = {}
    compiler_options: Any = cast_hint(dict[str, Any], data).get("compilerOptions")
    if not isinstance(compiler_options, dict):
        compiler_options = {}
    options = cast_hint(dict[str, Any], compiler_options)

    project_dir = descriptor_path.parent.resolve()
    resolved: dict[str, Path] = {}
    for key in ("rootDir", "outDir"):
        value = options.get(key)
        if not isinstance(value, str) or not value:
            xmsg = (
                f"Missing `compilerOptions.{key}` in '{descriptor_path}'. "
                f"Please specify a `{key}` property."
            )
            raise ValueError(xmsg)
        resolved[key] = Path(os.path.normpath(os.path.join(project_dir, value)))

    return ProjectDescriptor(
        path=descriptor_path,
        project_dir=project_dir,
        root_dir=resolved["rootDir"],
        out_dir=resolved["outDir"],
    )


def make_project_facts(descriptor: ProjectDescriptor, cwd: Path) -> ProjectFacts:
    return ProjectFacts(
        project_dir=descriptor.project_dir,
        build_output_dir=descriptor.out_dir,
        cwd=cwd.resolve(),
    )


# --------------------------------------------------------------------------- #
# database descriptor probe
# --------------------------------------------------------------------------- #


def find_db_descriptor(
    project_dir: Path,
    cwd: Path | None = None,
    *,
    exists: Callable[[Path], bool] = os.path.exists,
) -> Path | None:
    """Return the first existing db descriptor, or None.

    Looks for `<project_dir>/prisma.yml`, then `<cwd>/prisma/prisma.yml`.
    """
    candidates = [project_dir / DB_DESCRIPTOR_NAME]
    fallback_root = cwd if cwd is not None else project_dir
    candidates.append(fallback_root / DB_DESCRIPTOR_FALLBACK_DIR / DB_DESCRIPTOR_NAME)

    for candidate in candidates:
        if exists(candidate):
            return candidate
    return None


def make_db_probe(
    exists: Callable[[Path], bool] = os.path.exists,
) -> Callable[[ProjectFacts], bool]:
    """Build a presence probe over `find_db_descriptor` using `exists`."""

    def probe(facts: ProjectFacts) -> bool:
        found = find_db_descriptor(facts.project_dir, facts.cwd, exists=exists)
        if found is not None:
            getAppLogger().debug("Found database descriptor at %s", found)
        return found is not None

    return probe
