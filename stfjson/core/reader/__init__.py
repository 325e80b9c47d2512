"""
Reader module for lexing STF streams into chunks.

ChunkReader does the character-level work; ChunkStream adds the
expect-next-chunk lookahead used by the document builder.
"""

from stfjson.core.reader.chunk_reader import ChunkReader, ReaderState
from stfjson.core.reader.chunk_stream import ChunkStream

__all__ = ["ChunkReader", "ChunkStream", "ReaderState"]
