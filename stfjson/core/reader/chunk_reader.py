"""
Chunk reader for the STF tag/value markup.

An STF stream is a run of ``{tag}value`` chunks. Text outside any tag is a
comment and is reported under the synthetic ``S`` tag. Inside a value,
``{`` followed by a space is a literal brace; any other ``{`` starts the
next chunk.
"""

import codecs
import io
from enum import Enum
from typing import IO, Iterator

from stfjson.models.chunk import COMMENT_TAG, TERMINATOR_TAGS, Chunk
from stfjson.utils.exceptions import ConfigError, LexError
from stfjson.utils.logger import get_logger

logger = get_logger(__name__)

OPEN_TAG = "{"
CLOSE_TAG = "}"
ESCAPE = " "

# C isspace() set; str.isspace() would also match NBSP from cp437 0xFF.
WHITESPACE = " \t\n\v\f\r"

READ_SIZE = 4096


class ReaderState(str, Enum):
    """Lexer states within a single read_chunk() call."""

    COMMENT = "comment"
    TAG = "tag"
    DATA = "data"
    END = "end"


class ChunkReader:
    """
    Lexes a character stream into Chunk objects.

    Usage:
        reader = ChunkReader(sys.stdin)
        for chunk in reader:
            print(chunk.tag, chunk.value)
    """

    def __init__(self, stream: IO, encoding: str = "cp437"):
        """
        Initialize reader over a readable stream.

        Args:
            stream: Text stream, or binary stream decoded with ``encoding``
            encoding: Encoding used when ``stream`` yields bytes

        Raises:
            ConfigError: If ``encoding`` is not a known codec
        """
        self._stream = stream
        self._encoding = encoding
        self._decoder = None
        # Anything whose read() yields bytes is binary, file object or not
        if isinstance(stream.read(0), bytes):
            try:
                self._decoder = codecs.getincrementaldecoder(encoding)()
            except LookupError as e:
                raise ConfigError(f"Unknown input encoding: {encoding}", context={"encoding": encoding}) from e
        self._buffer = ""
        self._pos = 0
        self._pushback: list[str] = []
        self._offset = 0

    @classmethod
    def from_string(cls, text: str) -> "ChunkReader":
        """Create a reader over an in-memory string."""
        return cls(io.StringIO(text, newline=""))

    @property
    def offset(self) -> int:
        """Number of characters consumed so far."""
        return self._offset

    def _read_text(self) -> str:
        """Read the next block of text, or "" at end of stream."""
        while True:
            data = self._stream.read(READ_SIZE)
            if self._decoder is None:
                return data
            at_end = not data
            try:
                text = self._decoder.decode(data, final=at_end)
            except UnicodeDecodeError as e:
                raise LexError(
                    f"Input is not valid {self._encoding}: {e.reason}",
                    context={
                        "offset": self._offset,
                        "encoding": self._encoding,
                        "bytes": e.object[e.start : e.end],
                    },
                ) from e
            # A block can end inside a multi-byte character
            if text or at_end:
                return text

    def _getc(self) -> str:
        """Read one character, or "" at end of stream."""
        if self._pushback:
            c = self._pushback.pop()
        else:
            if self._pos >= len(self._buffer):
                self._buffer = self._read_text()
                self._pos = 0
                if not self._buffer:
                    return ""
            c = self._buffer[self._pos]
            self._pos += 1
        self._offset += 1
        return c

    def _ungetc(self, c: str) -> None:
        """Push a character back; end-of-stream markers are dropped."""
        if not c:
            return
        self._pushback.append(c)
        self._offset -= 1

    def read_chunk(self) -> Chunk | None:
        """
        Read the next chunk from the stream.

        Returns:
            The next Chunk, or None on a clean end of stream

        Raises:
            LexError: If the stream ends inside a tag or value
        """
        state = ReaderState.COMMENT
        tag_chars: list[str] = []
        value_chars: list[str] = []
        tag = ""
        start = self._offset

        while state != ReaderState.END:
            c = self._getc()
            if not c:
                break

            if state == ReaderState.COMMENT:
                if c in WHITESPACE:
                    continue
                if c == OPEN_TAG:
                    state = ReaderState.TAG
                    continue
                # Stray text before a tag; reprocess it as comment data
                tag = COMMENT_TAG
                state = ReaderState.DATA

            if state == ReaderState.TAG:
                if c != CLOSE_TAG:
                    tag_chars.append(c)
                    continue
                tag = "".join(tag_chars)
                if not tag:
                    logger.warning(f"Found an empty tag at offset {self._offset}, data may be malformed")
                state = ReaderState.END if tag in TERMINATOR_TAGS else ReaderState.DATA
                continue

            if state == ReaderState.DATA:
                if c == OPEN_TAG:
                    following = self._getc()
                    if following != ESCAPE:
                        self._ungetc(following)
                        self._ungetc(c)
                        state = ReaderState.END
                        continue
                elif c in WHITESPACE and not value_chars:
                    continue
                value_chars.append(c)

        if state != ReaderState.END:
            if state == ReaderState.COMMENT:
                return None
            context = {"offset": self._offset, "state": state.value, "chunk_start": start}
            if state == ReaderState.DATA:
                context["tag"] = tag
            else:
                context["partial_tag"] = "".join(tag_chars)
            raise LexError(f"Stream ended inside a {state.value} chunk", context=context)

        value = "".join(value_chars).rstrip(WHITESPACE) if value_chars else None
        return Chunk(tag=tag, value=value)

    def __iter__(self) -> Iterator[Chunk]:
        while True:
            chunk = self.read_chunk()
            if chunk is None:
                return
            yield chunk
