"""
Console logging for the segment overlay application.

Each module asks for its logger once at import time; the CLI then sets the
session level for all of them with set_log_level.

Usage:
    from segment_app_qt.utils.logger import get_logger
    logger = get_logger(__name__)
    logger.debug("Frame built")
"""

import logging
import sys
from typing import Optional, Union


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers handed out so far, so set_log_level can reach them
_registry: dict[str, logging.Logger] = {}


def get_logger(
    name: str,
    level: int = logging.INFO,
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
) -> logging.Logger:
    """
    Get the stdout logger for a module.

    The first call for a name attaches a console handler; later calls
    return the same logger unchanged.

    Args:
        name: Module name, usually __name__
        level: Initial level until set_log_level is called
        log_format: Record format (default: DEFAULT_FORMAT)
        date_format: Timestamp format (default: DEFAULT_DATE_FORMAT)

    Returns:
        The module's logger
    """
    if name in _registry:
        return _registry[name]

    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(level)

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(
            logging.Formatter(
                fmt=log_format or DEFAULT_FORMAT,
                datefmt=date_format or DEFAULT_DATE_FORMAT,
            )
        )
        logger.addHandler(handler)

        # Parent loggers would print every record a second time
        logger.propagate = False

    _registry[name] = logger
    return logger


def set_log_level(level: Union[int, str]) -> None:
    """
    Apply one level to every logger from get_logger and to their handlers.

    Args:
        level: Level number or name such as "DEBUG"; unknown names fall
            back to INFO
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    for logger in _registry.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
