"""
Logging configuration for the command-line front end.

The library modules only create loggers; handlers are attached here. Console
output goes to stderr so it never interleaves with the bar on stdout.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "progress_tracker"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    console: bool = True,
) -> logging.Logger:
    """
    Set up logging for the ``progress_tracker`` logger hierarchy.

    Parameters
    ----------
    level : str, optional
        Logging level name (default: "INFO")
    log_file : Path, optional
        Path to log file (default: None, no file logging)
    console : bool, optional
        Log to stderr (default: True)

    Returns
    -------
    logging.Logger
        Configured package logger
    """
    numeric = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
