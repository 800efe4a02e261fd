# src/yogaconf/module_loader.py
"""Load exports from auxiliary modules referenced by the config.

The db client and schema descriptor are referenced by path. Python modules
are imported from that path; JSON/JSONC documents are read as data. Paths in
another source format (e.g. `.ts`) are mapped to a loadable rendition: a
sibling file with a supported suffix, or its mirror under the build output
directory.
"""

import importlib.util
import sys
import traceback
from collections.abc import Sequence
from difflib import get_close_matches
from pathlib import Path
from types import ModuleType
from typing import Any

from apathetic_utils import cast_hint, load_jsonc, remove_path_in_error_message

from .config.config_types import LoadRequest
from .logs import getAppLogger
from .meta import PROGRAM_PACKAGE


PYTHON_SUFFIXES = (".py",)
DATA_SUFFIXES = (".jsonc", ".json")
SUPPORTED_SUFFIXES = PYTHON_SUFFIXES + DATA_SUFFIXES

# whole-document export for data files
DEFAULT_EXPORT = "default"


class ModuleLoadError(RuntimeError):
    """An auxiliary module could not be located, executed, or lacks an export."""


class ModuleLoader:
    """Default auxiliary-module loader.

    Each call loads every module fresh; nothing is cached between calls.
    """

    def load(
        self,
        requests: Sequence[LoadRequest],
        *,
        project_dir: Path,
        out_dir: Path,
    ) -> list[Any]:
        logger = getAppLogger()
        logger.trace(f"[ModuleLoader] Loading {len(requests)} module(s)")

        results: list[Any] = []
        for request in requests:
            source = self.locate(request.path, project_dir=project_dir, out_dir=out_dir)
            logger.debug("Loading `%s` from %s", request.export_name, source)
            results.append(self._load_export(source, request.export_name))
        return results

    def locate(self, path: Path, *, project_dir: Path, out_dir: Path) -> Path:
        """Return a loadable file standing in for `path`.

        Order: `path` itself if its suffix is supported, then a sibling with a
        supported suffix, then the same relative location under `out_dir`.
        """
        if path.suffix in SUPPORTED_SUFFIXES and path.is_file():
            return path

        candidates = [path.with_suffix(s) for s in SUPPORTED_SUFFIXES]
        try:
            rel = path.relative_to(project_dir)
        except ValueError:
            rel = None
        if rel is not None:
            mirrored = out_dir / rel
            candidates.extend(mirrored.with_suffix(s) for s in SUPPORTED_SUFFIXES)

        for candidate in candidates:
            if candidate.is_file():
                return candidate

        tried = ", ".join(str(c) for c in candidates)
        xmsg = f"No loadable rendition of {path} (tried: {tried})"
        raise ModuleLoadError(xmsg)

    # --- internals ------------------------------------------------------------

    def _load_export(self, source: Path, export_name: str) -> Any:
        if source.suffix in PYTHON_SUFFIXES:
            module = self._import_python(source)
            if hasattr(module, export_name):
                return getattr(module, export_name)
            public = [n for n in vars(module) if not n.startswith("_")]
            xmsg = f"{source.name} has no export `{export_name}`"
            close = get_close_matches(export_name, public, n=1, cutoff=0.6)
            if close:
                xmsg += f". Did you mean `{close[0]}`?"
            raise ModuleLoadError(xmsg)

        data = self._load_data(source)
        if export_name == DEFAULT_EXPORT:
            return data
        if isinstance(data, dict) and export_name in data:
            return cast_hint(dict[str, Any], data)[export_name]
        xmsg = f"{source.name} has no top-level key `{export_name}`"
        raise ModuleLoadError(xmsg)

    def _import_python(self, source: Path) -> ModuleType:
        module_name = f"_{PROGRAM_PACKAGE}_aux_{source.stem.replace('-', '_')}"
        spec = importlib.util.spec_from_file_location(module_name, source)
        if not spec or not spec.loader:
            xmsg = f"Could not create import spec for {source}"
            raise ModuleLoadError(xmsg)

        # Allow sibling imports from the auxiliary module's directory
        parent_dir = str(source.parent)
        added_to_sys_path = parent_dir not in sys.path
        if added_to_sys_path:
            sys.path.insert(0, parent_dir)

        # The module and any siblings it imports from its own directory are
        # registered only while it executes, so the next load starts fresh.
        modules_before = set(sys.modules)
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            tb = traceback.format_exc()
            xmsg = (
                f"Error while executing auxiliary module: {source.name}\n"
                f"{type(e).__name__}: {e}\n{tb}"
            )
            raise ModuleLoadError(xmsg) from e
        finally:
            sys.modules.pop(module_name, None)
            for name in set(sys.modules) - modules_before:
                if _is_under(sys.modules[name], source.parent):
                    del sys.modules[name]
            if added_to_sys_path and sys.path[0] == parent_dir:
                sys.path.pop(0)
        return module

    def _load_data(self, source: Path) -> Any:
        try:
            return load_jsonc(source)
        except ValueError as e:
            clean_msg = remove_path_in_error_message(str(e), source)
            xmsg = f"Error while loading '{source.name}': {clean_msg}"
            raise ModuleLoadError(xmsg) from e


def _is_under(module: ModuleType | None, directory: Path) -> bool:
    module_file = getattr(module, "__file__", None)
    if not module_file:
        return False
    return Path(module_file).resolve().is_relative_to(directory.resolve())
