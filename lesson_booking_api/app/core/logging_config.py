"""
Basic logging configuration for the application.

The ``setup_logging`` function configures the root logger with a
console and optional file handler.  Log format includes the timestamp,
logger name, log level and message.  Request access lines are written
by the HTTP middleware under ``ACCESS_LOGGER``; its level is set
separately (``ACCESS_LOG_LEVEL``) so a busy storefront can keep the
application log at INFO and silence per-request lines.  The root
handlers are installed exactly once.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

ACCESS_LOGGER = "lesson_booking_api.access"


def _level(name: str) -> int:
    level = getattr(logging, name.upper(), logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    access_level: Optional[str] = None,
) -> None:
    """Configure root logger and the request access logger.

    If no handlers are attached to the root logger, attach a
    console handler and optionally a file handler.  The root
    logger's level is set based on the provided ``level``.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.  If omitted or empty, no
        file handler is added.  Paths are resolved relative to the
        current working directory.
    access_level : Optional[str]
        Level for the access logger.  Applied on every call, even when
        the root logger is already configured; empty leaves the access
        logger inheriting the root level.
    """
    if access_level:
        logging.getLogger(ACCESS_LOGGER).setLevel(_level(access_level))

    logger = logging.getLogger()
    if logger.handlers:
        # Already configured (tests, repeated ``create_app`` calls or a
        # server that installed its own handlers).
        return

    logger.setLevel(_level(level))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
