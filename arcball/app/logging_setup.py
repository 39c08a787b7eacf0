from __future__ import annotations

import logging
import logging.config
import os
import queue
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path

from arcball.app.app_settings_manager import AppSettingsManager, RunMode
from arcball.utils.log_util import level_from_name


def _project_root_from_package() -> Path:
    # arcball/app/logging_setup.py -> parents[2] is the project root.
    return Path(__file__).resolve().parents[2]


def _find_writable_log_dir(app_name: str) -> Path:
    """
    First, project_root/logs
    Second, user's home directory
    """
    candidates = [
        _project_root_from_package() / "logs",
        Path.home() / f".{app_name.lower()}" / "logs",
    ]
    for d in candidates:
        try:
            d.mkdir(parents=True, exist_ok=True)
            test = d / ".write_test"
            test.write_text("ok", encoding="utf-8")
            test.unlink(missing_ok=True)
            return d
        except OSError:
            continue
    # Finally, current directory.
    d = Path.cwd() / "logs"
    d.mkdir(parents=True, exist_ok=True)
    return d


def default_log_dir(app_name: str) -> Path:
    return _find_writable_log_dir(app_name)


def build_config(app_name: str, level: str | None = None, log_dir: Path | None = None) -> dict:
    """Build a logging config dict."""
    level = (level or os.getenv("ARCBALL_LOG_LEVEL", "INFO")).upper()
    log_dir = log_dir or default_log_dir(app_name)
    log_file = str(log_dir / f"{app_name}.log")

    fmt = "%(asctime)s.%(msecs)03dZ %(levelname)s %(process)d %(threadName)s %(name)s %(message)s"
    datefmt = "%Y-%m-%dT%H:%M:%S"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": fmt, "datefmt": datefmt,
            },
        },
        "handlers": {
            # records are queued and written to file by the listener
            "queue": {"class": "logging.handlers.QueueHandler", "queue": queue.Queue(-1)},
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": "INFO",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {"level": level, "handlers": ["queue", "console"]},
        "_file_settings": {
            "filename": log_file,
            "maxBytes": 1024 * 1024 * 5,
            "backupCount": int(os.getenv("ARCBALL_LOG_BACKUP_COUNT", 5)),
            "encoding": "utf-8",
            "format": fmt,
            "datefmt": datefmt
        },
    }


class LogSystem:
    """Thin wrapper owning the QueueListener that writes the log file."""
    def __init__(self, app_name: str, level: str | None = None):
        cfg = build_config(app_name, level)
        file_settings = cfg.pop("_file_settings")
        logging.config.dictConfig(cfg)

        qh: QueueHandler | None = None
        for h in logging.getLogger().handlers:
            if isinstance(h, QueueHandler):
                qh = h
                break
        if qh is None:
            raise RuntimeError("QueueHandler not found.")

        self._console_handler: logging.Handler | None = None
        for h in logging.getLogger().handlers:
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
                self._console_handler = h
                break

        self._file_handler = RotatingFileHandler(
            file_settings["filename"],
            maxBytes=file_settings["maxBytes"],
            backupCount=file_settings["backupCount"],
            encoding=file_settings["encoding"],
        )
        self._file_handler.setFormatter(
            logging.Formatter(file_settings["format"], file_settings["datefmt"]))
        self.log_file = Path(file_settings["filename"])

        self.listener = QueueListener(qh.queue, self._file_handler, respect_handler_level=True)
        self.listener.start()

    @classmethod
    def from_levels(cls, app_name: str, root_level: int = logging.INFO,
                    console_level: int | None = None, file_level: int | None = None) -> LogSystem:
        """Create a LogSystem and apply the given levels right away."""
        logs = cls(app_name, logging.getLevelName(root_level))
        logs.apply_levels(root_level, console_level=console_level, file_level=file_level)
        return logs

    def apply_levels(self, root_level: int, console_level: int | None = None,
                     file_level: int | None = None) -> None:
        """Update log levels after startup."""
        logging.getLogger().setLevel(root_level)
        if self._console_handler is not None and console_level is not None:
            self._console_handler.setLevel(console_level)
        if file_level is not None:
            self._file_handler.setLevel(file_level)

    def stop(self):
        self.listener.stop()
        self._file_handler.close()


def apply_logging_policy(logs: LogSystem, settings: AppSettingsManager) -> None:
    """Switch log levels according to the run mode."""
    mode = getattr(settings, "run_mode", None)
    if mode is None:
        mode = RunMode.DEVELOPMENT if getattr(settings, "dev_mode", False) else RunMode.PRODUCTION

    if mode == RunMode.DEVELOPMENT or mode == RunMode.VERBOSE:
        root = logging.DEBUG
        console = logging.DEBUG
        file = logging.DEBUG
    else:
        root = level_from_name(getattr(settings, "logging_level", "INFO"))
        console = logging.INFO
        file = logging.DEBUG

    logs.apply_levels(root_level=root, console_level=console, file_level=file)
    logging.getLogger(__name__).info("Logging policy applied: mode=%s", mode)
