"""
PNGPANG Logger
Logging setup shared by the command layer and the CLI.
"""

import logging
import sys
from functools import wraps
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Callable

from config import LOGGING_SETTINGS

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name, level=None):
    """
    Create and configure a logger.

    Args:
        name: logger name (normally ``__name__``)
        level: log level name; defaults to ``LOGGING_SETTINGS["level"]``

    Returns:
        logging.Logger: the configured logger
    """
    logger = logging.getLogger(name)

    # handlers are attached once per logger
    if logger.handlers:
        return logger

    if level is None:
        level = LOGGING_SETTINGS.get("level", "INFO")
    logger.setLevel(getattr(logging, level))

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)

    log_dir = LOGGING_SETTINGS.get("log_dir")
    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path / LOGGING_SETTINGS.get("log_file", "pngpang.log"),
            maxBytes=LOGGING_SETTINGS.get("max_bytes", 2 * 1024 * 1024),
            backupCount=LOGGING_SETTINGS.get("backup_count", 3),
            encoding="utf-8",
        )
        file_handler.setLevel(getattr(logging, level))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # stdout carries command output, so the console handler writes to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, LOGGING_SETTINGS.get("console_level", level)))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def log_operation(operation_name):
    """Decorator that logs the start, completion or failure of an operation.

    Usage: ``@log_operation("Encode Message")``. Exceptions are logged and
    re-raised unchanged.
    """
    if not isinstance(operation_name, str):
        raise TypeError("log_operation must be given an operation name")

    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(func.__module__)
            logger.info(f"[{operation_name}] Started")
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                logger.error(f"[{operation_name}] FAILED: {exc}")
                raise
            logger.info(f"[{operation_name}] Completed")
            return result

        return wrapper

    return decorator
