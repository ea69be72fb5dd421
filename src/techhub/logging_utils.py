"""Centralized logging configuration for TechHub."""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import AppConfig

LOGGER_NAME = "techhub"
FILE_FORMAT = logging.Formatter(
    fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
CONSOLE_FORMAT = logging.Formatter("%(levelname)s: %(message)s")


def setup_logging(config: AppConfig, console: bool = True) -> logging.Logger:
    """Attach file and console handlers to the ``techhub`` logger.

    Repeated calls keep one handler of each kind. A file handler writing to a
    different path than ``config.log_path`` is closed and replaced.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    logger.propagate = False

    log_path = Path(config.log_path).resolve()
    current = _file_handler(logger)
    if current is not None and Path(current.baseFilename) != log_path:
        logger.removeHandler(current)
        current.close()
        current = None
    if current is None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(log_path, maxBytes=2 * 1024 * 1024, backupCount=5, encoding="utf-8")
        handler.setFormatter(FILE_FORMAT)
        logger.addHandler(handler)

    if console and _console_handler(logger) is None:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(CONSOLE_FORMAT)
        logger.addHandler(stream_handler)

    logger.debug("Logging to %s at %s level", log_path, config.log_level.upper())
    return logger


def _file_handler(logger: logging.Logger) -> Optional[RotatingFileHandler]:
    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler):
            return handler
    return None


def _console_handler(logger: logging.Logger) -> Optional[logging.Handler]:
    # file handlers subclass StreamHandler, so match the exact type
    for handler in logger.handlers:
        if type(handler) is logging.StreamHandler:
            return handler
    return None


__all__ = ["setup_logging"]
