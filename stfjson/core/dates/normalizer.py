"""
Legacy date normalization.

Agenda writes dates using one of twelve layouts selected by the {d} tag
(Appendix B-7 of the Agenda manual). Parsing here is locale-independent:
month names are always the English ones, so output does not depend on the
platform running the conversion.
"""

import re
from datetime import datetime
from typing import NamedTuple

from stfjson.utils.exceptions import ConfigError, DateFormatError

MIN_FORMAT_INDEX = 1
MAX_FORMAT_INDEX = 12
DEFAULT_FORMAT_INDEX = 1

# Year used by layouts that carry no year, matching strptime's default.
EPOCH_YEAR = 1900

MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

_MDY = r"(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{1,4})"
_DMY_SLASH = r"(?P<day>\d{1,2})/(?P<month>\d{1,2})/(?P<year>\d{1,4})"
_DMY = r"(?P<day>\d{1,2})\.(?P<month>\d{1,2})\.(?P<year>\d{1,4})"
_YMD = r"(?P<year>\d{1,4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})"
_D_MON = r"(?P<day>\d{1,2})-(?P<month_name>[A-Za-z]{3,9})"
_D_MON_Y = _D_MON + r"-(?P<year>\d{1,4})"

_CLOCK_24 = r"\s+(?P<hour>\d{1,2}):(?P<minute>\d{1,2})"
_CLOCK_12 = _CLOCK_24 + r"\s*(?P<meridiem>[AaPp][Mm])"

_HEADER = re.compile(
    r"(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{1,2});"
    r"(?P<hour>\d{1,2}):(?P<minute>\d{1,2}):(?P<second>\d{1,2});002"
)


class DateFormat(NamedTuple):
    """One entry of the legacy date format table."""

    label: str
    pattern: re.Pattern
    twelve_hour: bool


def _entry(label: str, layout: str, twelve_hour: bool = False) -> DateFormat:
    clock = _CLOCK_12 if twelve_hour else _CLOCK_24
    return DateFormat(label, re.compile(layout + clock), twelve_hour)


DATE_FORMATS: dict[int, DateFormat] = {
    1: _entry("MM/DD/YYYY hh:mm", _MDY),
    2: _entry("MM/DD/YYYY hh:mm", _MDY),
    3: _entry("DD.MM.YYYY hh:mm", _DMY),
    4: _entry("YYYY-MM-DD hh:mm", _YMD),
    5: _entry("DD-Mon hh:mm", _D_MON),
    6: _entry("DD-Mon-YYYY hh:mm", _D_MON_Y),
    7: _entry("MM/DD/YYYY hh:mmAM", _MDY, twelve_hour=True),
    # Day-first, unlike its 24-hour counterpart 2
    8: _entry("DD/MM/YYYY hh:mmAM", _DMY_SLASH, twelve_hour=True),
    9: _entry("DD.MM.YYYY hh:mmAM", _DMY, twelve_hour=True),
    10: _entry("YYYY-MM-DD hh:mmAM", _YMD, twelve_hour=True),
    11: _entry("DD-Mon hh:mmAM", _D_MON, twelve_hour=True),
    12: _entry("DD-Mon-YYYY hh:mmAM", _D_MON_Y, twelve_hour=True),
}


def format_timestamp(moment: datetime) -> str:
    """
    Render a datetime in the output timestamp format.

    Args:
        moment: Parsed date and time

    Returns:
        String like ``2020-10-05T14:30:00Z``
    """
    # strftime does not zero-pad years below 1000 on every platform
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}Z"
    )


def validate_format_index(value: str | int | None) -> int:
    """
    Validate a date format index from a {d} tag or configuration.

    Args:
        value: Index as text or integer

    Returns:
        Index in the range 1..12

    Raises:
        ConfigError: If the value is not an integer in 1..12
    """
    if isinstance(value, str):
        text = value.strip()
        if not text.isdigit():
            raise ConfigError("Invalid date format requested", context={"value": value})
        index = int(text)
    elif isinstance(value, int) and not isinstance(value, bool):
        index = value
    else:
        raise ConfigError("Invalid date format requested", context={"value": value})

    if not MIN_FORMAT_INDEX <= index <= MAX_FORMAT_INDEX:
        raise ConfigError(
            f"Date format {index} is outside {MIN_FORMAT_INDEX}..{MAX_FORMAT_INDEX}",
            context={"value": value},
        )
    return index


def _month_from_name(name: str) -> int | None:
    name = name.lower()
    for number, full in enumerate(MONTH_NAMES, start=1):
        if name == full or name == full[:3]:
            return number
    return None


def normalize(format_index: int, text: str) -> str:
    """
    Parse a legacy timestamp and render it as ISO-8601.

    Args:
        format_index: Entry of the date format table (1..12)
        text: Timestamp as written by Agenda

    Returns:
        Timestamp formatted as ``YYYY-MM-DDThh:mm:ssZ``

    Raises:
        ConfigError: If format_index is outside 1..12
        DateFormatError: If text does not match the selected format
    """
    date_format = DATE_FORMATS.get(format_index)
    if date_format is None:
        raise ConfigError("Invalid date format requested", context={"value": format_index})

    context = {"value": text, "format": format_index, "layout": date_format.label}
    match = date_format.pattern.fullmatch(text.strip())
    if match is None:
        raise DateFormatError(f"Timestamp does not match {date_format.label}", context=context)

    fields = match.groupdict()
    if fields.get("month_name") is not None:
        month = _month_from_name(fields["month_name"])
        if month is None:
            raise DateFormatError(f"Unknown month name {fields['month_name']!r}", context=context)
    else:
        month = int(fields["month"])

    year = int(fields["year"]) if fields.get("year") is not None else EPOCH_YEAR
    hour = int(fields["hour"])
    if date_format.twelve_hour:
        if not 1 <= hour <= 12:
            raise DateFormatError(f"Hour {hour} is not a 12-hour clock value", context=context)
        hour %= 12
        if fields["meridiem"].lower() == "pm":
            hour += 12

    try:
        moment = datetime(year, month, int(fields["day"]), hour, int(fields["minute"]))
    except ValueError as e:
        raise DateFormatError(f"Invalid timestamp: {e}", context=context) from e

    return format_timestamp(moment)


def parse_header_timestamp(text: str | None) -> str:
    """
    Parse the {STF} header value, e.g. ``10/05/20;08:00:00;002``.

    Two-digit years follow the POSIX pivot: 69-99 are 19xx, 00-68 are 20xx.

    Args:
        text: Header tag value

    Returns:
        Timestamp formatted as ``YYYY-MM-DDThh:mm:ssZ``

    Raises:
        DateFormatError: If the header does not match MM/DD/YY;HH:MM:SS;002
    """
    context = {"tag": "STF", "value": text}
    match = _HEADER.fullmatch(text.strip()) if text else None
    if match is None:
        raise DateFormatError("Failed to parse STF header tag", context=context)

    fields = {key: int(value) for key, value in match.groupdict().items()}
    year = fields["year"] + (1900 if fields["year"] >= 69 else 2000)

    try:
        moment = datetime(
            year,
            fields["month"],
            fields["day"],
            fields["hour"],
            fields["minute"],
            fields["second"],
        )
    except ValueError as e:
        raise DateFormatError(f"Invalid STF header timestamp: {e}", context=context) from e

    return format_timestamp(moment)
