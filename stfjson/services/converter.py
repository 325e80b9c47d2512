"""
STF to JSON conversion service.

Wires the chunk reader, document builder and output sink together using
the application configuration.
"""

from typing import IO

from stfjson.config import Config
from stfjson.core.reader import ChunkReader, ChunkStream
from stfjson.core.sink import TreeSink, create_sink, emit_document
from stfjson.models.document import Document
from stfjson.services.document_builder import DocumentBuilder, log_comment
from stfjson.utils.logger import get_logger

logger = get_logger(__name__)


def _discard_comment(text: str) -> None:
    pass


class StfConverter:
    """
    Converts STF streams into rendered JSON or YAML documents.

    Usage:
        converter = StfConverter(Config.from_env())
        print(converter.convert(sys.stdin.buffer))
    """

    def __init__(self, config: Config | None = None, sink: TreeSink | None = None):
        """
        Initialize converter.

        Args:
            config: Configuration (defaults if not provided)
            sink: Output sink; created from config.output if not provided
        """
        self.config = config or Config()
        self.sink = sink or create_sink(
            self.config.output.format,
            indent=self.config.output.indent,
            ensure_ascii=self.config.output.ensure_ascii,
        )
        self.builder = DocumentBuilder(
            default_date_format=self.config.builder.default_date_format,
            comment_handler=log_comment if self.config.builder.echo_comments else _discard_comment,
        )

    def parse(self, stream: IO) -> Document:
        """
        Read and build a document from a stream.

        Args:
            stream: Text or binary stream holding zero or more STF files

        Returns:
            Document

        Raises:
            StfJsonError: On any lexing, grammar, link, date or config failure
        """
        reader = ChunkReader(stream, encoding=self.config.reader.encoding)
        document = self.builder.build(ChunkStream(reader))
        logger.info(
            f"Parsed {len(document)} STF file(s): "
            f"{sum(len(f.categories) for f in document.files)} categories, "
            f"{sum(len(f.items) for f in document.files)} items"
        )
        return document

    def parse_string(self, text: str) -> Document:
        """Read and build a document from an in-memory string."""
        reader = ChunkReader.from_string(text)
        return self.builder.build(ChunkStream(reader))

    def render(self, document: Document) -> str:
        """Render a document through the configured sink."""
        return self.sink.render(emit_document(document, self.sink))

    def convert(self, stream: IO) -> str:
        """
        Parse a stream and render the result.

        Nothing is rendered unless the whole stream converts successfully.
        """
        return self.render(self.parse(stream))
