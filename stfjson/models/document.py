"""
Document models for converted STF files.

A single input may hold several concatenated STF files, so a Document is an
ordered list of FileRecords, each with its own categories and items.
"""

from pydantic import BaseModel, Field

from stfjson.models.link import CategoryLink


class ConditionSet(BaseModel):
    """Category assignment conditions or actions."""

    include: list[str] = Field(default_factory=list, description="Category names to include")
    exclude: list[str] = Field(default_factory=list, description="Category names to exclude")


class Category(BaseModel):
    """
    Category definition from a {C} ... {.} block.

    The name is stored raw, including any type symbol suffix.
    """

    name: str = Field(..., description="Raw category name")
    attributes: list[str] = Field(default_factory=list, description="Values of {r} tags")
    note: str | None = Field(default=None, description="Category note ({F})")
    conditions: ConditionSet | None = Field(default=None, description="Assignment conditions ({p})")
    actions: ConditionSet | None = Field(default=None, description="Assignment actions ({a})")


class Item(BaseModel):
    """Item definition from an {I} ... {!} block."""

    categories: list[CategoryLink] = Field(default_factory=list, description="Category links")
    text: str | None = Field(default=None, description="Item text ({T})")
    note: str | None = Field(default=None, description="Item note ({N})")


class FileRecord(BaseModel):
    """One STF file, started by an {STF} header."""

    timestamp: str = Field(..., description="Header timestamp, YYYY-MM-DDThh:mm:ssZ")
    categories: list[Category] = Field(default_factory=list)
    items: list[Item] = Field(default_factory=list)


class Document(BaseModel):
    """All files read from one input stream."""

    files: list[FileRecord] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.files)
