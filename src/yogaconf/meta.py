# src/yogaconf/meta.py
"""Program identity and version metadata."""

from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version


PROGRAM_PACKAGE = "yogaconf"
PROGRAM_SCRIPT = "yogaconf"
PROGRAM_DISPLAY = "Yogaconf"
PROGRAM_ENV = "YOGACONF"
# Stem of the user config file: yoga.config.py / yoga.config.jsonc / ...
PROGRAM_CONFIG = "yoga.config"


@dataclass(frozen=True)
class Metadata:
    version: str


def get_metadata() -> Metadata:
    """Return the installed distribution version, or "unknown" from a checkout."""
    try:
        return Metadata(version=version(PROGRAM_PACKAGE))
    except PackageNotFoundError:
        return Metadata(version="unknown")
