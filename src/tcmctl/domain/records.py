"""Pydantic models for Core Service items and the publication staging record.

Records are plain data: gateways produce and consume them, services stage
changes on them. Unknown remote attributes are kept verbatim (``extra="allow"``)
so a read-modify-update cycle never drops fields the CLI does not model.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

NULL_URI = "tcm:0-0-0"


class LinkRef(BaseModel):
    """Link to another item by id, with the title when known."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str | None = None


class ItemRecord(BaseModel):
    """Generic Core Service item."""

    model_config = ConfigDict(extra="allow")

    id: str = NULL_URI
    title: str | None = None


class PublicationRecord(ItemRecord):
    """Publication entity as staged for create/update calls."""

    key: str | None = None
    publication_type: str | None = None
    publication_path: str | None = None
    publication_url: str | None = None
    multimedia_path: str | None = None
    multimedia_url: str | None = None
    parents: list[LinkRef] = Field(default_factory=list)
    business_process_type: LinkRef | None = None

    @classmethod
    def default(cls) -> PublicationRecord:
        """Default template for a new publication (null id, no links)."""
        return cls(id=NULL_URI)


class PublicationFilter(BaseModel):
    """Filter passed to ``list_by_filter``; ``None`` selects every type."""

    model_config = ConfigDict(frozen=True)

    publication_type: str | None = None


class PublicationFields(BaseModel):
    """Sparse set of optional publication field updates.

    ``None`` or an empty string means "not supplied". ``parents`` entries are
    either ``tcm:`` URIs or publication titles.
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    key: str | None = None
    publication_path: str | None = None
    publication_url: str | None = None
    multimedia_path: str | None = None
    multimedia_url: str | None = None
    parents: list[str] | None = None
    business_process_type: str | None = None

    # Plain string attributes copied straight onto the record.
    SIMPLE_FIELDS: ClassVar[tuple[str, ...]] = (
        "title",
        "publication_path",
        "publication_url",
        "multimedia_path",
        "multimedia_url",
    )

    def is_empty(self) -> bool:
        """Whether no field at all was supplied."""
        values = self.model_dump(exclude={"parents"})
        return not any(values.values()) and self.parents is None
