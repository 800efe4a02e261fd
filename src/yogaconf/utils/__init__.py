# src/yogaconf/utils/__init__.py

from .utils_paths import display_path, path_or_default, value_or_default


__all__ = [  # noqa: RUF022
    # utils_paths
    "display_path",
    "path_or_default",
    "value_or_default",
]
