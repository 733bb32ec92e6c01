"""
Logging configuration module for unibook.
"""

import logging
from pathlib import Path

from .display.rich_logger import build_rich_handler


ROOT_LOGGER = "unibook"


class PrefixFormatter(logging.Formatter):
    """A plain formatter that tags each record with a short level prefix."""

    # Level to prefix mapping
    LEVEL_PREFIXES = {
        logging.DEBUG: "[D]",
        logging.INFO: "[*]",
        logging.WARNING: "[-]",
        logging.ERROR: "[#]",
        logging.CRITICAL: "[!]",
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as ``[time] prefix message``."""
        prefix = self.LEVEL_PREFIXES.get(record.levelno, "[?]")
        formatted_time = self.formatTime(record, self.datefmt)
        message = f"[{formatted_time}] {prefix} {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logger(
    name: str = ROOT_LOGGER,
    level: str = "INFO",
    log_file: str | Path | None = None,
    console: bool = True,
) -> logging.Logger:
    """
    Set up a logger with the specified name and level.

    Args:
        name: The name of the logger
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file that receives a plain-text copy of the log
        console: Attach a Rich handler writing to stderr

    Returns:
        Configured logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if console:
        console_handler = build_rich_handler()
        console_handler.setLevel(numeric_level)
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(PrefixFormatter(datefmt="%d/%b/%Y %H:%M:%S"))
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Get an existing logger or create a new one if it doesn't exist.

    Args:
        name: The name of the logger

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def set_log_level(level: str, logger_name: str = ROOT_LOGGER) -> None:
    """
    Set the log level for an existing logger.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: The name of the logger to modify
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(logger_name)
    logger.setLevel(numeric_level)

    # Update all handlers
    for handler in logger.handlers:
        handler.setLevel(numeric_level)


def get_valid_log_levels() -> list[str]:
    """Return a list of valid log level names."""
    return ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
