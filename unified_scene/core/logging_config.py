"""
Logging Configuration
Sets up the logger for the 'unified_scene' namespace.
"""
import logging
import logging
import sys
import sys
import typing
import typing
from unified_scene.core.config import get_log_level
from unified_scene.core.config import get_log_level

def setup_logging(level: int | None = None, log_file: str | None = None) -> logging.Logger:
    """
    Configures the package logger with a console handler and an optional file handler.
#   Configures the package logger with a console handler and an optional file handler.

    Args:
#   Args:
        level: Logging level (e.g. logging.DEBUG), read from UNIFIED_SCENE_LOG_LEVEL when None.
#       level: Logging level (e.g. logging.DEBUG), read from UNIFIED_SCENE_LOG_LEVEL when None.
        log_file: Optional path to save logs to a file.
#       log_file: Optional path to save logs to a file.
    """
    if level is None:
#   if level is None:
        level = get_log_level()
#       level = get_log_level()

    logger: logging.Logger = logging.getLogger("unified_scene")
#   logger: logging.Logger = logging.getLogger("unified_scene")
    logger.setLevel(level)
#   logger.setLevel(level)

    # Avoid duplicate output when called more than once
#   # Avoid duplicate output when called more than once
    if logger.hasHandlers():
#   if logger.hasHandlers():
        logger.handlers.clear()
#       logger.handlers.clear()

    formatter: logging.Formatter = logging.Formatter(
#   formatter: logging.Formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
#       "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
#       datefmt="%H:%M:%S",
    )
#   )

    console_handler: logging.StreamHandler[typing.TextIO] = logging.StreamHandler(sys.stdout)
#   console_handler: logging.StreamHandler[typing.TextIO] = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
#   console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
#   console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
#   logger.addHandler(console_handler)

    if log_file:
#   if log_file:
        file_handler: logging.FileHandler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
#       file_handler: logging.FileHandler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
#       file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
#       file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
#       logger.addHandler(file_handler)

    return logger
#   return logger
