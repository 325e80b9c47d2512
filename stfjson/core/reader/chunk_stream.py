"""
Chunk source with explicit lookahead expectations for the document builder.
"""

from typing import Callable

from stfjson.core.reader.chunk_reader import ChunkReader
from stfjson.models.chunk import Chunk
from stfjson.utils.exceptions import GrammarError


class ChunkStream:
    """Sequential chunk source wrapping a ChunkReader, with one chunk of lookahead."""

    def __init__(self, reader: ChunkReader):
        self._reader = reader
        self._peeked: list[Chunk | None] = []

    @property
    def offset(self) -> int:
        """Characters consumed from the underlying stream."""
        return self._reader.offset

    def next_chunk(self) -> Chunk | None:
        """Return the next chunk, or None at a clean end of stream."""
        if self._peeked:
            return self._peeked.pop()
        return self._reader.read_chunk()

    def peek(self) -> Chunk | None:
        """Return the next chunk without consuming it."""
        if not self._peeked:
            self._peeked.append(self._reader.read_chunk())
        return self._peeked[0]

    def expect_chunk(
        self,
        predicate: Callable[[Chunk], bool],
        description: str,
        context: dict | None = None,
    ) -> Chunk:
        """
        Consume the next chunk and require it to match ``predicate``.

        Args:
            predicate: Test the chunk must pass
            description: What was expected, used in the error message
            context: Extra error context (e.g. the chunk that needed lookahead)

        Returns:
            The matching chunk

        Raises:
            GrammarError: If the stream ends or the chunk does not match
        """
        error_context = {**(context or {}), "offset": self.offset}
        chunk = self.next_chunk()
        if chunk is None:
            raise GrammarError(f"Expected {description}, reached end of stream", context=error_context)
        if not predicate(chunk):
            error_context["found"] = str(chunk)
            raise GrammarError(f"Expected {description}, found {{{chunk.tag}}}", context=error_context)
        return chunk
