"""
Category link parser.

An item's {C} value names a category it belongs to, with the category's
type symbol at the end or in the middle (Appendix B-11):

    Priority;Pri;Urgent\\      standard, name;shortname;alias...
    Colour/                   exclusive
    Misc|                     unindexed
    Due@|10/05/2020 14:30     date, followed by its value
    Cost#|50                  numeric, followed by its value

``%`` is Agenda's escape character (Appendix B-13): the character after it
is literal and never a type symbol or separator.
"""

from stfjson.core.dates.normalizer import normalize
from stfjson.models.link import CategoryLink, LinkType
from stfjson.utils.exceptions import LinkFormatError

ESCAPE_CHAR = "%"
NAME_SEPARATOR = ";"

# Trailing symbols for links without a value
SUFFIX_TYPES = {
    "\\": LinkType.STANDARD,
    "/": LinkType.EXCLUSIVE,
    "|": LinkType.UNINDEXED,
}

# Infix markers for links followed by a value, in match order
VALUE_MARKERS = (
    ("@|", LinkType.DATE),
    ("#|", LinkType.NUMERIC),
)


def _escaped_positions(text: str) -> set[int]:
    """Indices of characters made literal by a preceding escape."""
    escaped = set()
    i = 0
    while i < len(text):
        if text[i] == ESCAPE_CHAR and i + 1 < len(text):
            escaped.add(i + 1)
            i += 2
        else:
            i += 1
    return escaped


def _find_marker(text: str, marker: str, escaped: set[int]) -> int:
    for i in range(len(text) - len(marker) + 1):
        if i not in escaped and text.startswith(marker, i):
            return i
    return -1


def classify_link(definition: str) -> tuple[LinkType, str, str | None]:
    """
    Determine a link's type and split off its names and value portions.

    Args:
        definition: Raw {C} value from an item

    Returns:
        Tuple of (link type, names portion, raw value portion or None)

    Raises:
        LinkFormatError: If the definition is too short or has no type symbol
    """
    if len(definition) < 2:
        raise LinkFormatError("Attempted to parse invalid category link", context={"value": definition})

    escaped = _escaped_positions(definition)
    last = len(definition) - 1
    symbol = definition[last]

    if symbol in SUFFIX_TYPES and last not in escaped:
        link_type = SUFFIX_TYPES[symbol]
        # @| and #| at the end introduce an empty value, not an unindexed link
        value_marker = definition[last - 1] in "@#" and (last - 1) not in escaped
        if link_type != LinkType.UNINDEXED or not value_marker:
            return link_type, definition[:last], None

    for marker, link_type in VALUE_MARKERS:
        position = _find_marker(definition, marker, escaped)
        if position >= 0:
            return link_type, definition[:position], definition[position + len(marker) :]

    raise LinkFormatError(f"Could not determine type of link {definition}", context={"value": definition})


def split_names(names: str) -> list[str]:
    """
    Split a names portion on unescaped separators.

    Escapes are kept as written; empty fields are dropped.
    """
    fields: list[str] = []
    current: list[str] = []
    i = 0
    while i < len(names):
        c = names[i]
        if c == ESCAPE_CHAR and i + 1 < len(names):
            current.append(names[i : i + 2])
            i += 2
            continue
        if c == NAME_SEPARATOR:
            fields.append("".join(current))
            current = []
        else:
            current.append(c)
        i += 1
    fields.append("".join(current))
    return [field for field in fields if field]


def unescape_value(value: str) -> str:
    """
    Remove escapes from a value portion and isolate the value text.

    Each ``%`` is dropped and the character after it copied verbatim. The
    value is whatever follows the last unescaped ``;``, or the whole text
    when there is none.
    """
    out: list[str] = []
    i = 0
    while i < len(value):
        c = value[i]
        if c == ESCAPE_CHAR:
            if i + 1 < len(value):
                out.append(value[i + 1])
            i += 2
            continue
        if c == NAME_SEPARATOR:
            out = []
        else:
            out.append(c)
        i += 1
    return "".join(out)


def parse_link(definition: str, format_index: int) -> CategoryLink:
    """
    Parse an item's category link definition.

    Args:
        definition: Raw {C} value from an item
        format_index: Active date format, used for date links

    Returns:
        CategoryLink

    Raises:
        LinkFormatError: If the link cannot be classified, has no name, or is numeric
        DateFormatError: If a date link's value does not match the active format
    """
    link_type, names, raw_value = classify_link(definition)

    fields = split_names(names)
    if not fields:
        raise LinkFormatError("A category must have a name", context={"value": definition})

    name, shortname, aliases = fields[0], None, None
    if len(fields) > 1:
        shortname = fields[1]
    if len(fields) > 2:
        aliases = fields[2:]

    value = None
    if raw_value is not None:
        if link_type != LinkType.DATE:
            raise LinkFormatError(
                f"Value type not supported for {link_type.value} link",
                context={"value": definition},
            )
        value = normalize(format_index, unescape_value(raw_value))

    return CategoryLink(type=link_type, name=name, shortname=shortname, alsomatch=aliases, value=value)
