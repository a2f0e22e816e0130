"""
Logging configuration utility for the checksum CLI and services.

Console logging goes to stderr so that digests printed on stdout can be piped.
"""
import logging
import sys
import os
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(module)s::%(funcName)s - %(message)s'


def verbosity_to_level(verbosity: int) -> int:
    """Map a -v count to a logging level (0=off, 1=info, 2+=debug)."""
    if verbosity <= 0:
        return logging.CRITICAL + 1  # disables all log output to terminal
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(verbosity: int = 0, logfile: Optional[str] = None) -> None:
    """
    Configure logging level and optional file output.

    Args:
        verbosity (int): Verbosity level (0=off, 1=info, 2=debug).
        logfile (str, optional): Path to log file. If None, logs only to console.

    Returns:
        None
    """
    level = verbosity_to_level(verbosity)
    formatter = logging.Formatter(LOG_FORMAT)

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    if verbosity > 0:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(logfile, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    logger.info(f"Command line: {' '.join(sys.argv)}")
    logger.info(f"Current working directory: {os.getcwd()}")
