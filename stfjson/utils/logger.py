"""
Logging configuration using Loguru.

stdout carries the converted document, so every sink here writes to stderr
or to a file.
"""

import sys
from pathlib import Path

from loguru import logger

# One diagnostic per line, prefixed like other command-line filters
CONSOLE_FORMAT = "stfjson: <level>{level}</level>: {message}"
DEBUG_CONSOLE_FORMAT = "stfjson: <level>{level}</level>: <cyan>{extra[module]}</cyan>:{line} - {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[module]}:{function}:{line} - {message}"


def setup_logging(
    level: str = "INFO",
    log_to_file: bool = False,
    log_dir: str = "logs",
    file_rotation: str = "10 MB",
    file_retention: str = "7 days",
    compression: str = "zip",
    serialize: bool = True,
) -> None:
    """
    Route stfjson diagnostics to stderr and, optionally, a rotating log file.

    Takes the fields of LoggingConfig as keyword arguments. At DEBUG and
    below the console lines also name the module and line that logged.
    """
    logger.remove()
    # Records logged without get_logger() still need a module for the formats
    logger.configure(extra={"module": "stfjson"})

    verbose = level.upper() in ("TRACE", "DEBUG")
    logger.add(
        sys.stderr,
        level=level,
        format=DEBUG_CONSOLE_FORMAT if verbose else CONSOLE_FORMAT,
        colorize=sys.stderr.isatty(),
    )

    if not log_to_file:
        return

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_path / "stfjson_{time:YYYY-MM-DD}.log",
        level=level,
        format=FILE_FORMAT,
        rotation=file_rotation,
        retention=file_retention,
        compression=compression,
        serialize=serialize,
        enqueue=True,
    )


def get_logger(name: str):
    """Get a logger bound to a module name."""
    return logger.bind(module=name)
