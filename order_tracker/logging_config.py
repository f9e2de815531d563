"""
logging_config.py — Centralized Logging Configuration for the Order Tracker

This module configures unified logging behavior for the entire application.
Observer output, parser diagnostics and startup failures all go through it.

Features:
    • Console output on stdout, optionally mirrored to a log file
    • Logger name tagging, so observer lines are distinguishable from diagnostics
    • Standardized log format for all modules
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """
    Configures the global logging system for the application.

    Args:
        level (str): Log level name, e.g. "INFO" or "DEBUG".
        log_file (str | None): Optional path of a file that receives a copy of all log lines.

    Notes:
        - Calling this again replaces the handlers installed by a previous call.
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def get_logger(name):
    """
    Returns a logger instance for a given module or component name.

    Args:
        name (str): The logger name, typically the module’s __name__.

    Returns:
        logging.Logger: A logger that follows the global format and handlers.
    """
    return logging.getLogger(name)
