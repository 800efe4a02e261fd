# tests/utils/__init__.py

from .config import (
    make_config_content,
    make_exists,
    make_facts,
    make_summary,
    write_config_file,
)
from .constants import DEFAULT_TEST_LOG_LEVEL
from .loader import FakeLoader
from .project import make_project


__all__ = [  # noqa: RUF022
    # config
    "make_config_content",
    "make_exists",
    "make_facts",
    "make_summary",
    "write_config_file",
    # constants
    "DEFAULT_TEST_LOG_LEVEL",
    # loader
    "FakeLoader",
    # project
    "make_project",
]
