"""Centralized logging configuration."""

import logging
import sys

from app.config import settings


# Client libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "pymongo")


def setup_logging() -> logging.Logger:
    """Configure and return the application logger."""

    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logger = logging.getLogger("clinic_voice_panel")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(handler)

    if not settings.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug(f"Logging configured with level: {logging.getLevelName(level)}")

    return logger


# Global logger
logger = setup_logging()
