import logging
import os
from logging.handlers import RotatingFileHandler

__all__ = ["get_logger", "logger"]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
FRONTEND_LOG_FILE = os.getenv("FRONTEND_LOG_FILE")

_FORMAT = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")


def get_logger(name: str = "frontend") -> logging.Logger:
    """Return a configured logger for frontend code.

    Keeps a single initialization (no duplicate handlers). Configure via the
    LOG_LEVEL and FRONTEND_LOG_FILE env vars. Streamlit installs its own root
    handler, so these loggers don't propagate to avoid printing twice.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    logger.propagate = False

    sh = logging.StreamHandler()
    sh.setFormatter(_FORMAT)
    logger.addHandler(sh)

    # The event listener thread logs too; a shared file keeps sessions together
    if FRONTEND_LOG_FILE:
        try:
            fh = RotatingFileHandler(FRONTEND_LOG_FILE, maxBytes=2 * 1024 * 1024, backupCount=2, encoding="utf-8")
        except OSError:
            logger.exception("Failed to create file log handler for %s", FRONTEND_LOG_FILE)
        else:
            fh.setFormatter(_FORMAT)
            logger.addHandler(fh)

    return logger


# Module-level logger for easy imports in frontend modules:
logger = get_logger("csv_explorer_frontend")
