"""Application-wide logger writing to platformdirs user_log_dir."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "taskdesk"
_LOG_FILE = "taskdesk.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def _build_handler() -> logging.Handler:
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
    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger, initialising it on first call.

    Args:
        name: Optional component name. Named loggers are children of the
            application logger (``taskdesk.<name>``) and share its handler.

    Returns:
        The application logger or one of its children
    """
    global _logger
    if _logger is None:
        logger = logging.getLogger(_APP_NAME)
        logger.setLevel(logging.DEBUG)
        # Drop handlers left over from a previous initialisation
        for stale in list(logger.handlers):
            logger.removeHandler(stale)
            stale.close()
        logger.addHandler(_build_handler())
        logger.propagate = False
        _logger = logger

    if name:
        return _logger.getChild(name)
    return _logger


def set_log_level(level: str | int) -> None:
    """Set the level of the application logger (e.g. ``"INFO"``)."""
    if isinstance(level, str):
        level = level.upper()
    get_logger().setLevel(level)
