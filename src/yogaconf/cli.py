# src/yogaconf/cli.py

import argparse
import json
import platform
import sys
from difflib import get_close_matches
from pathlib import Path
from typing import Any

from apathetic_logging import LEVEL_ORDER, safeLog

from .config import ImportedConfig, ResolvedConfig, import_config
from .logs import getAppLogger
from .meta import (
    PROGRAM_DISPLAY,
    PROGRAM_SCRIPT,
    get_metadata,
)


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        # Build known option strings: ["-v", "--verbose", "--log-level", ...]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        # "unrecognized arguments: --cofnig ..."
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = [tok for tok in bad.split() if tok.startswith("-")]
            for arg in bad_args:
                close = get_close_matches(arg, known_opts, n=1, cutoff=0.6)
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")

        self.print_usage(sys.stderr)
        full = f"{self.prog}: error: {message}"
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        self.exit(2, full + "\n")


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(
        prog=PROGRAM_SCRIPT,
        description="Resolve a yoga project configuration and print it as JSON.",
    )

    parser.add_argument("-c", "--config", help="Path to the yoga config file.")
    parser.add_argument(
        "--cwd",
        default=None,
        help="Directory to resolve from (default: current working directory).",
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        help=(
            "Validate the configuration file and resolved paths "
            "without printing the result."
        ),
    )

    # --- Version and verbosity ---
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        choices=LEVEL_ORDER,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )
    return parser


def _initialize_logger(args: argparse.Namespace) -> None:
    """Initialize logger with CLI args, env vars, and defaults."""
    logger = getAppLogger()
    log_level = logger.determineLogLevel(args=args)
    logger.setLevel(log_level)
    logger.enable_color = logger.determineColorEnabled()
    logger.trace("[BOOT] log-level initialized: %s", logger.levelName)

    logger.debug(
        "Runtime: Python %s (%s)\n    %s",
        platform.python_version(),
        platform.python_implementation(),
        sys.version.replace("\n", " "),
    )


def _json_default(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    # loaded client / descriptor objects
    return repr(value)


def render_config(resolved: ResolvedConfig) -> str:
    """Render a resolved config as JSON (paths as strings)."""
    return json.dumps(resolved, indent=2, default=_json_default)


def _log_summary(imported: ImportedConfig, cwd: Path) -> None:
    logger = getAppLogger()
    if imported.config_path:
        logger.info("🔧 Using config: %s", imported.config_path.name)
    else:
        logger.info("🔧 No config file found; using defaults.")
    logger.info("📁 Project root: %s", imported.project_dir)
    logger.info("📂 Invoked from: %s", cwd)
    if imported.config["db_integration"] is None:
        logger.debug("Database integration: off")
    else:
        logger.debug("Database integration: on")


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:
    logger = getAppLogger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        # --- Early runtime init (use CLI + env + defaults) ---
        _initialize_logger(args)

        # --- Version flag ---
        if getattr(args, "version", None):
            meta = get_metadata()
            logger.info("%s %s", PROGRAM_DISPLAY, meta.version)
            return 0

        cwd = Path(args.cwd).resolve() if args.cwd else Path.cwd().resolve()
        imported = import_config(
            cwd,
            config_path=Path(args.config) if args.config else None,
            log_level=args.log_level,
        )
        logger.trace("[CONFIG] log-level re-resolved from config: %s", logger.levelName)

        _log_summary(imported, cwd)

        if getattr(args, "validate_config", None):
            logger.info("✅ Configuration is valid.")
            return 0

        sys.stdout.write(render_config(imported.config) + "\n")

    except (FileNotFoundError, ValueError, TypeError, RuntimeError) as e:
        # controlled termination
        silent = getattr(e, "silent", False)
        if not silent:
            try:
                logger.errorIfNotDebug(str(e))
            except Exception:  # noqa: BLE001
                safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return 1

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            logger.criticalIfNotDebug("Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return 1

    else:
        return 0
