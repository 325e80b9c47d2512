"""
Data models for stfjson.

Core models:
- Chunk: one tag/value pair from the reader
- Document, FileRecord: converted STF files
- Category, ConditionSet: category definitions
- Item, CategoryLink, LinkType: items and their category links
"""

from stfjson.models.chunk import COMMENT_TAG, TERMINATOR_TAGS, Chunk
from stfjson.models.document import Category, ConditionSet, Document, FileRecord, Item
from stfjson.models.link import CategoryLink, LinkType

__all__ = [
    # Reader models
    "Chunk",
    "COMMENT_TAG",
    "TERMINATOR_TAGS",
    # Document models
    "Document",
    "FileRecord",
    "Category",
    "ConditionSet",
    "Item",
    # Link models
    "CategoryLink",
    "LinkType",
]
