"""
Logging Configuration
Sets up the logger for the 'hedra' namespace.
"""
import logging
import sys
from typing import Optional

from hedra.config import get_log_level


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'hedra' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO). When omitted,
            the level is read from the HEDRA_LOG_LEVEL environment variable.
        log_file: Optional path to save logs to a file.

    Returns:
        The configured package logger.
    """
    if level is None:
        level = get_log_level()

    logger = logging.getLogger("hedra")
    logger.setLevel(level)

    # Repeated setup must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
    return logger
