"""
Date module for Agenda's legacy timestamp layouts.
"""

from stfjson.core.dates.normalizer import (
    DATE_FORMATS,
    DEFAULT_FORMAT_INDEX,
    DateFormat,
    format_timestamp,
    normalize,
    parse_header_timestamp,
    validate_format_index,
)

__all__ = [
    "DATE_FORMATS",
    "DEFAULT_FORMAT_INDEX",
    "DateFormat",
    "format_timestamp",
    "normalize",
    "parse_header_timestamp",
    "validate_format_index",
]
