"""Application-wide logger writing to platformdirs user_log_dir."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "worklog_cli"
_LOG_FILE = "worklog.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def get_logger(level: str | int | None = None) -> logging.Logger:
    """Return the singleton application logger, initialising it on first call.

    Args:
        level: Optional level name or number. Applied on every call so that
            the configured level can be set once the config is loaded.
    """
    global _logger
    if _logger is not None:
        if level is not None:
            _logger.setLevel(level)
        return _logger

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(level if level is not None else logging.INFO)
    if not logger.handlers:
        log_dir = Path(user_log_dir(_APP_NAME))
        log_dir.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.RotatingFileHandler(
            log_dir / _LOG_FILE,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger


def get_component_logger(name: str) -> logging.Logger:
    """Return a child of the application logger, e.g. ``worklog_cli.timer``.

    Does not touch handlers; records reach the log file once ``get_logger()``
    has configured the parent.
    """
    return logging.getLogger(f"{_APP_NAME}.{name}")
