"""
Chunk model: one (tag, value) pair read from an STF stream.
"""

from pydantic import BaseModel, ConfigDict, Field

COMMENT_TAG = "S"

# Tags that never carry a value; the chunk ends at the closing brace.
TERMINATOR_TAGS = frozenset({";", "+", "-", ".", "!"})


class Chunk(BaseModel):
    """
    A single tag/value pair produced by the chunk reader.

    Text that appears outside any tag is reported under the synthetic
    comment tag "S".
    """

    model_config = ConfigDict(frozen=True)

    tag: str = Field(..., description="Tag name between the braces")
    value: str | None = Field(default=None, description="Data following the tag, if any")

    @property
    def is_comment(self) -> bool:
        """True for {S} chunks, which never affect the document."""
        return self.tag == COMMENT_TAG

    def __str__(self) -> str:
        if self.value is None:
            return f"{{{self.tag}}}"
        return f"{{{self.tag}}}{self.value}"
