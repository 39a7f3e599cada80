"""Logging configuration and utilities for the MT942 parser."""

import logging
import os
from typing import Optional

from mt942.config.settings import LOG_LEVEL, LOG_FORMAT, LOGS_DIR


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: str = LOG_LEVEL,
    logs_dir: str = LOGS_DIR,
    log_format: str = LOG_FORMAT,
    console_output: bool = True
) -> logging.Logger:
    """Set up a logger with console and file handlers.

    Args:
        name: Logger name.
        log_file: Optional log file name. If None, uses logger name.
        level: Logging level.
        logs_dir: Directory the log file is written to.
        log_format: Format string for both handlers.
        console_output: Whether to also log to the console.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)

    if console_output:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # File handler
    if log_file is None:
        log_file = f"{name}.log"

    log_path = os.path.join(logs_dir, log_file)
    os.makedirs(logs_dir, exist_ok=True)

    file_handler = logging.FileHandler(log_path)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
