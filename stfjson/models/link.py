"""
Category link model.

Items reference categories through links such as ``Priority;Pri;Urgent\\``.
The trailing type symbol decides the link type; date links also carry a
value.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class LinkType(str, Enum):
    """Category type symbols used in item links."""

    STANDARD = "standard"  # trailing \
    EXCLUSIVE = "exclusive"  # trailing /
    UNINDEXED = "unindexed"  # trailing |
    DATE = "date"  # @| followed by a value
    NUMERIC = "numeric"  # #| followed by a value (not supported)


class CategoryLink(BaseModel):
    """An item's assignment to a category."""

    type: LinkType = Field(..., description="Link type decoded from the type symbol")
    name: str = Field(..., min_length=1, description="Category name")
    shortname: str | None = Field(default=None, description="Optional short name")
    alsomatch: list[str] | None = Field(
        default=None,
        description="Alias names the category also matches",
    )
    value: str | None = Field(default=None, description="ISO-8601 timestamp for date links")

    @model_validator(mode="after")
    def check_value_matches_type(self) -> "CategoryLink":
        """Only date links carry a value, and they always do."""
        if self.type == LinkType.DATE and self.value is None:
            raise ValueError("date link requires a value")
        if self.type != LinkType.DATE and self.value is not None:
            raise ValueError(f"{self.type.value} link cannot have a value")
        return self
