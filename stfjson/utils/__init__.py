"""Utility modules for stfjson."""

from stfjson.utils.exceptions import (
    ConfigError,
    DateFormatError,
    GrammarError,
    LexError,
    LinkFormatError,
    StfJsonError,
)
from stfjson.utils.logger import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Exceptions
    "StfJsonError",
    "LexError",
    "GrammarError",
    "LinkFormatError",
    "DateFormatError",
    "ConfigError",
]
