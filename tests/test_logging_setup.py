import time
import logging
from pathlib import Path

import pytest

from arcball.app import logging_setup
from arcball.app.app_settings_manager import RunMode


@pytest.fixture(autouse=True)
def _isolate_logging():
    """
    Reset logging after each test so handlers do not leak between tests.
    """
    yield
    logging.shutdown()
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(logging.WARNING)


@pytest.fixture
def tmp_log_dir(tmp_path: Path):
    d = tmp_path / "logs"
    d.mkdir(parents=True, exist_ok=True)
    return d


@pytest.fixture
def module(tmp_log_dir, monkeypatch):
    """
    logging_setup with default_log_dir pointed at a temporary directory.
    """
    monkeypatch.setattr(logging_setup, "default_log_dir", lambda app_name: tmp_log_dir)
    return logging_setup


class StubSettings:
    def __init__(self, run_mode, logging_level="INFO"):
        self.run_mode = run_mode
        self.logging_level = logging_level


def _read_text(path: Path) -> str:
    """Retry briefly in case the listener thread is still writing."""
    for _ in range(10):
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            time.sleep(0.02)
    return path.read_text(encoding="utf-8", errors="replace")


def test_build_config_uses_env_level(module, monkeypatch, tmp_log_dir):
    monkeypatch.setenv("ARCBALL_LOG_LEVEL", "warning")
    cfg = module.build_config("arcball")
    assert cfg["root"]["level"] == "WARNING"
    assert cfg["_file_settings"]["filename"] == str(tmp_log_dir / "arcball.log")


def test_info_level_writes_file(module, tmp_log_dir):
    """test at INFO level"""
    logs = module.LogSystem.from_levels("arcball", root_level=logging.INFO, console_level=logging.INFO)
    logger = logging.getLogger("arcball.test")

    logger.debug("debug should NOT appear")
    logger.info("info should appear")
    logger.warning("warning should appear")
    logs.stop()

    log_file = tmp_log_dir / "arcball.log"
    assert log_file.exists()

    text = _read_text(log_file)
    assert "info should appear" in text
    assert "warning should appear" in text
    assert "debug should NOT appear" not in text

    assert " INFO " in text or " WARNING " in text
    assert "arcball.test" in text


def test_debug_level_outputs_debug(module, tmp_log_dir):
    """test at DEBUG level"""
    logs = module.LogSystem.from_levels("arcball", root_level=logging.DEBUG, console_level=logging.DEBUG)
    logger = logging.getLogger("arcball.controller")

    logger.debug("debug visible")
    logger.info("info visible")
    logs.stop()

    text = _read_text(tmp_log_dir / "arcball.log")
    assert "debug visible" in text
    assert "info visible" in text


def test_queue_listener_flush_on_stop(module, tmp_log_dir):
    logs = module.LogSystem.from_levels("arcball", root_level=logging.INFO, console_level=logging.INFO)
    logger = logging.getLogger("arcball.bulk")

    for i in range(200):
        logger.info("line %04d", i)

    logs.stop()

    text = _read_text(tmp_log_dir / "arcball.log")

    assert "line 0000" in text
    assert "line 0099" in text
    assert "line 0199" in text
    assert "line 0200" not in text
    assert text.count("arcball.bulk") >= 150


def test_logging_policy_development_enables_debug(module):
    logs = module.LogSystem.from_levels("arcball", root_level=logging.INFO)
    try:
        module.apply_logging_policy(logs, StubSettings(RunMode.DEVELOPMENT))
        assert logging.getLogger().level == logging.DEBUG
    finally:
        logs.stop()


def test_logging_policy_production_uses_configured_level(module):
    logs = module.LogSystem.from_levels("arcball", root_level=logging.DEBUG)
    try:
        module.apply_logging_policy(logs, StubSettings(RunMode.PRODUCTION, "WARNING"))
        assert logging.getLogger().level == logging.WARNING
    finally:
        logs.stop()
