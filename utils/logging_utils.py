"""Simple logging utility wrapper."""
import logging
from typing import Dict, Optional, Union

from config import LOG_LEVEL

_loggers: Dict[str, logging.Logger] = {}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    """Turn a level name like "DEBUG" (or None for the configured default) into a logging level."""
    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        # getLevelName maps known names to ints and unknown ones to "Level X"
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Get or create a logger instance.

    Args:
        name: Logger name (typically __name__)
        level: Logging level; defaults to LOG_LEVEL from config

    Returns:
        Logger instance
    """
    if name not in _loggers:
        resolved = _resolve_level(level)
        logger = logging.getLogger(name)
        logger.setLevel(resolved)

        # Create console handler if not exists
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(resolved)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)

        _loggers[name] = logger

    return _loggers[name]
