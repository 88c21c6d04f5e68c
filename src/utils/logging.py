"""Simple logging utility.

Provides a lightweight wrapper around Python's standard logging
module so the header reader, the point extractor and the command line
inspector all log in the same format.
"""

import logging
from typing import Optional, Union


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Return a configured logger with a preset format.

    The handler is attached once per logger name.  ``level`` overrides
    the default INFO level when given.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='[%(asctime)s] [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    if level is not None:
        logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger


def set_level(level: Union[int, str], prefix: str = "src") -> None:
    """Set the level of every logger created under ``prefix``."""
    if isinstance(level, str):
        level = level.upper()
    for name, logger in logging.root.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and (name == prefix or name.startswith(prefix + ".")):
            logger.setLevel(level)
