# /scholar_track/app_logger.py

import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DEFAULT_LEVEL = os.getenv("SCHOLAR_TRACK_LOG_LEVEL", "INFO").upper()


def setup_logging() -> logging.Logger:
    """Configures the package logger once and returns it."""
    level = getattr(logging, _DEFAULT_LEVEL, logging.INFO)

    logger = logging.getLogger("scholar_track")
    logger.setLevel(level)

    # Avoid duplicate console handlers when the module is reloaded.
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.setLevel(level)
        logger.addHandler(handler)

    return logger


def get_logger(name: str = None) -> logging.Logger:
    base = logging.getLogger("scholar_track")
    return base.getChild(name) if name else base


logger = setup_logging()
