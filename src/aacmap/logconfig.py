import logging
import os
from typing import Optional

TRACE = 5

logging.addLevelName(TRACE, "TRACE")


DEFAULT_FORMAT = (
    "%(asctime)s %(levelname)s [%(name)s.%(funcName)s:%(lineno)d] - %(message)s"
)


def get_level() -> str:
    """Get the logging level for aacmap from the environment."""
    return os.getenv("AACMAP_LOGGING_LEVEL", "WARNING")


def use_dev_logger() -> bool:
    return os.getenv("AACMAP_USE_DEV_LOGGER", "").lower() == "true"


def get_handler(
    level: Optional[str] = None, fmt: str = DEFAULT_FORMAT
) -> logging.Handler:
    """Get a handler for the aacmap logger.

    Log records are discarded unless the development logger is enabled, in which
    case they are written to stderr."""
    handler = logging.StreamHandler() if use_dev_logger() else logging.NullHandler()
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level or get_level())
    return handler


def configure_root_logger(
    level: Optional[str] = None, fmt: str = DEFAULT_FORMAT
) -> logging.Logger:
    """Configure the aacmap package logger, replacing any handlers installed by a
    previous call."""
    level = (level or get_level()).upper()
    logger = logging.getLogger("aacmap")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.addHandler(get_handler(level=level, fmt=fmt))
    return logger
