"""Application-wide logger writing to platformdirs user_log_dir."""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "focusnote"
_LOG_FILE = "focusnote.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_LOG_DIR_ENV = "FOCUSNOTE_LOG_DIR"

_logger: logging.Logger | None = None


def get_log_dir() -> Path:
    override = os.environ.get(_LOG_DIR_ENV)
    return Path(override) if override else Path(user_log_dir(_APP_NAME))


def get_logger() -> logging.Logger:
    """Return the package logger, attaching the rotating file handler on first call.

    Modules log through ``logging.getLogger(__name__)``; their records
    propagate to this logger.
    """
    global _logger
    if _logger is not None:
        return _logger

    log_dir = get_log_dir()
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

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.DEBUG)
    if not logger.handlers:
        logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger


def reset_logger() -> None:
    """Detach handlers so the next get_logger() call reconfigures (tests)."""
    global _logger
    logger = logging.getLogger(_APP_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    _logger = None
