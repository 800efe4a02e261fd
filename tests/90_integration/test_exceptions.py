# tests/90_integration/test_exceptions.py
"""Tests for error handling in yogaconf.cli.main."""

import apathetic_logging as mod_alogs
import apathetic_utils as mod_utils
import pytest

import yogaconf.cli as mod_cli
import yogaconf.logs as mod_logs
import yogaconf.meta as mod_meta
import yogaconf.module_loader as mod_loader


def test_main_handles_controlled_exception(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Simulate a controlled exception (e.g. ValueError) and verify clean handling."""

    # --- stubs ---
    def fake_parser() -> object:
        xmsg = "mocked config failure"
        raise ValueError(xmsg)

    # --- patch and execute ---
    mod_utils.patch_everywhere(
        monkeypatch,
        mod_cli,
        "_setup_parser",
        fake_parser,
        package_prefix=mod_meta.PROGRAM_PACKAGE,
    )
    code = mod_cli.main([])

    # --- verify ---
    assert code == 1
    out = capsys.readouterr().err.lower()
    assert "mocked config failure" in out


def test_main_handles_module_load_error(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Loader failures are RuntimeErrors and end in a clean exit code."""

    # --- stubs ---
    def fake_import_config(*_args: object, **_kwargs: object) -> object:
        xmsg = "No loadable rendition of client.ts"
        raise mod_loader.ModuleLoadError(xmsg)

    # --- patch and execute ---
    mod_utils.patch_everywhere(
        monkeypatch,
        mod_cli,
        "import_config",
        fake_import_config,
        package_prefix=mod_meta.PROGRAM_PACKAGE,
    )
    code = mod_cli.main([])

    # --- verify ---
    assert code == 1
    assert "no loadable rendition" in capsys.readouterr().err.lower()


def test_main_handles_unexpected_exception(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Simulate an unexpected internal error and ensure it logs as critical."""

    # --- stubs ---
    def fake_parser() -> object:
        xmsg = "boom!"
        raise OSError(xmsg)  # not one of the controlled types

    # --- patch and execute ---
    mod_utils.patch_everywhere(
        monkeypatch,
        mod_cli,
        "_setup_parser",
        fake_parser,
        package_prefix=mod_meta.PROGRAM_PACKAGE,
    )
    code = mod_cli.main([])

    # --- verify ---
    assert code == 1
    out = capsys.readouterr().err.lower()
    assert "unexpected internal error" in out


def test_main_fallbacks_to_safe_log(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """If the logger itself fails, safeLog() is used instead of recursion."""
    # --- setup ---
    called: dict[str, str] = {}
    logger = mod_logs.getAppLogger()

    # --- stubs ---
    def fake_parser() -> object:
        xmsg = "simulated fail"
        raise ValueError(xmsg)

    def fake_safe_log(msg: str) -> None:
        called["msg"] = msg

    def exploding_log(*_args: object, **_kwargs: object) -> None:
        xmsg = "logger exploded"
        raise RuntimeError(xmsg)

    # --- patch and execute ---
    mod_utils.patch_everywhere(
        monkeypatch,
        mod_cli,
        "_setup_parser",
        fake_parser,
        package_prefix=mod_meta.PROGRAM_PACKAGE,
    )
    mod_utils.patch_everywhere(
        monkeypatch,
        mod_alogs,
        "safeLog",
        fake_safe_log,
        package_prefix=mod_meta.PROGRAM_PACKAGE,
    )
    monkeypatch.setattr(logger, "errorIfNotDebug", exploding_log)
    code = mod_cli.main([])

    # --- verify ---
    assert code == 1
    assert "Logging failed while reporting" in called["msg"]
