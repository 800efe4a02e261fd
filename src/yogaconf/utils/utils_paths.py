# src/yogaconf/utils/utils_paths.py

import os
from pathlib import Path


def value_or_default(value: str | None, default: str) -> str:
    """Return the user value, or the default when it is missing or empty."""
    return value if value else default


def path_or_default(
    project_dir: Path | str,
    value: str | None,
    default: str,
) -> Path:
    """Join the user value (or the default) onto the project root.

    Uses filesystem joining rather than concatenation: `./` and `../` segments
    are collapsed and an absolute value replaces the root entirely. A relative
    root is taken from the current working directory.
    """
    chosen = value_or_default(value, default)
    return Path(os.path.abspath(os.path.join(project_dir, chosen)))


def display_path(path: Path, value: str | None, default: str) -> str:
    """Render a resolved path for messages.

    Directory-style inputs such as `./src/graphql/` keep their trailing
    separator so the message echoes what the user (or the default) wrote.
    """
    chosen = value_or_default(value, default)
    if chosen.endswith(("/", os.sep)):
        return f"{path}{os.sep}"
    return str(path)
