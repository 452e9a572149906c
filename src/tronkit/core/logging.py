"""
Loggers for the tronkit package.

Every module logger hangs off the "tronkit" root name. set_log_level() changes the level of the loggers created so
far and of every logger created after it, so a TronConfig.log_level applied at startup covers modules imported later.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

__all__ = ["get_logger", "set_log_level"]

ROOT_LOGGER = "tronkit"
DEFAULT_FORMAT = '%(asctime)s [%(name)s] [%(levelname)s]: %(message)s'

_package_level = logging.INFO


def _to_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def _in_package(name: str) -> bool:
    return name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + ".")


def get_logger(name: str, log_level: Optional[str] = None, log_file: Optional[Path] = None,
               format_string: Optional[str] = None) -> logging.Logger:
    """
    Get or create a logger writing to stdout, and to `log_file` when given.

    Args:
        name: Logger name (typically __name__ from calling module)
        log_level: Explicit level; tronkit loggers otherwise follow the package level
        log_file: Optional path to log file for persistent logging
        format_string: Optional custom format string

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Prevent adding duplicate handlers
    if logger.handlers:
        return logger

    if log_level is not None:
        logger.setLevel(_to_level(log_level))
    else:
        logger.setLevel(_package_level if _in_package(name) else logging.INFO)

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    console_handler = logging.StreamHandler(stream=sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def set_log_level(log_level: str) -> None:
    """
    Apply a level to every tronkit logger, present and future
    """
    global _package_level
    _package_level = _to_level(log_level)
    for name, candidate in logging.Logger.manager.loggerDict.items():
        if _in_package(name) and isinstance(candidate, logging.Logger):
            candidate.setLevel(_package_level)
