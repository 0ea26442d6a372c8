import logging
from logging.handlers import RotatingFileHandler

from backend.src.core.config import BACKEND_LOG_FILE, LOG_LEVEL

__all__ = ["get_logger", "logger"]

_FORMAT = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

# One rotating file shared by every module logger
_file_handler = None


def _get_file_handler():
    global _file_handler
    if _file_handler is None and BACKEND_LOG_FILE:
        _file_handler = RotatingFileHandler(BACKEND_LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        _file_handler.setFormatter(_FORMAT)
    return _file_handler


def get_logger(name: str = "backend") -> logging.Logger:
    """Return a configured logger. Safe to call multiple times (won't duplicate handlers).

    Configurable via environment variables:
    - LOG_LEVEL: default INFO
    - BACKEND_LOG_FILE: optional path to enable rotating file logging

    Records don't propagate to the root logger, which uvicorn configures
    with its own handlers.
    """
    logger = logging.getLogger(name)

    # If handlers already configured, assume initialization was done elsewhere.
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    logger.propagate = False

    # Stream handler (console)
    sh = logging.StreamHandler()
    sh.setFormatter(_FORMAT)
    logger.addHandler(sh)

    try:
        fh = _get_file_handler()
    except OSError:
        # Keep console logging if the file handler can't be created.
        logger.exception("Failed to create file log handler for %s", BACKEND_LOG_FILE)
    else:
        if fh is not None:
            logger.addHandler(fh)

    return logger


# Module-level logger for convenient imports: `from backend.src.core.logger import logger`
logger = get_logger("csv_explorer_backend")
