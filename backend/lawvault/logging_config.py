"""
Logging for the ``lawvault`` package.

Handlers are attached to the package logger, not the root logger, so the
service's records keep their own format next to uvicorn's. Level, format
and the optional log file all come from ``Settings``. Each call replaces the
handlers installed by the previous one, so every ``create_app`` (one per
test, one per worker) logs to the destination its own settings name.
"""

import logging
from pathlib import Path

from lawvault.config import Settings

PACKAGE_LOGGER = "lawvault"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(settings: Settings) -> logging.Logger:
    """Configure and return the package logger.

    Unknown level names fall back to ``INFO``.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    logger.propagate = False

    formatter = logging.Formatter(fmt=settings.log_format, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(Path(settings.log_file).resolve(), encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
