"""
Custom exception hierarchy for stfjson.

Every failure while reading or building an STF document is fatal, so these
exceptions are never recovered inside the library. They all inherit from
StfJsonError so callers can catch the whole family at the edge.
"""


class StfJsonError(Exception):
    """
    Base exception for all stfjson errors.
    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize stfjson error.
        Args:
            message: Error message
            context: Optional context dictionary (tag, value, state, ...)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def describe(self) -> str:
        """
        Render the message with its context on a single line.

        Returns:
            Message followed by sorted key=value pairs, if any
        """
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value!r}" for key, value in sorted(self.context.items()))
        return f"{self.message} ({details})"


class LexError(StfJsonError):
    """
    Chunk reader errors.
    Raised when a chunk is malformed or the stream ends in the middle of one.
    """

    pass


class GrammarError(StfJsonError):
    """
    Document grammar errors.
    Raised when a tag is not valid in the current builder state, or when a
    required lookahead chunk has the wrong shape.
    """

    pass


class LinkFormatError(StfJsonError):
    """
    Category link errors.
    Raised when a link definition cannot be classified, or uses the
    unsupported numeric value type.
    """

    pass


class DateFormatError(StfJsonError):
    """
    Timestamp errors.
    Raised when a date does not match the selected legacy format or the
    STF header pattern.
    """

    pass


class ConfigError(StfJsonError):
    """
    Configuration errors.
    Raised when a date-format index is outside 1..12 or configuration is invalid.
    """

    pass
