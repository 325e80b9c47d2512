"""
Shared test fixtures.
"""

import sys

import pytest
from loguru import logger

from stfjson.core.reader import ChunkReader, ChunkStream
from stfjson.services.document_builder import DocumentBuilder


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore a plain stderr sink after tests that reconfigure loguru."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def comments():
    """List that receives {S} comment text from builders using `build`."""
    return []


@pytest.fixture
def build(comments):
    """Build a Document from STF text."""

    def _build(text: str, **kwargs):
        builder = DocumentBuilder(comment_handler=comments.append, **kwargs)
        return builder.build(ChunkStream(ChunkReader.from_string(text)))

    return _build
