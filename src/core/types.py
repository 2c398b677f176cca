"""Shared typed models.

This module defines the content categories, the loosely typed staging
record produced by row normalization, and the fixed per-category record
schemas written into snapshots and read back by the content reader.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Mapping, Union


class ContentCategory(str, Enum):
    """Content domains synchronized independently."""

    EVENTS = "events"
    GALLERY = "gallery"
    COMMITTEE = "committee"

    @property
    def spec(self) -> "CategorySpec":
        """Return the sheet/file/image-field binding for this category."""
        return CATEGORY_SPECS[self]


@dataclass(frozen=True)
class CategorySpec:
    """Binding of a category to its remote sheet and local snapshot.

    Attributes:
        sheet_name: Worksheet title in the spreadsheet.
        file_name: Snapshot JSON file name under the data directory.
        image_field: Record field holding an image reference, if any.
    """

    sheet_name: str
    file_name: str
    image_field: str | None = None


CATEGORY_SPECS: dict[ContentCategory, CategorySpec] = {
    ContentCategory.EVENTS: CategorySpec(sheet_name="Events", file_name="events.json"),
    ContentCategory.GALLERY: CategorySpec(
        sheet_name="Gallery", file_name="gallery.json", image_field="imageurl"
    ),
    ContentCategory.COMMITTEE: CategorySpec(
        sheet_name="Committee", file_name="committee.json", image_field="photourl"
    ),
}

RawRows = list[list[str]]


@dataclass(frozen=True)
class StagedRecord:
    """Normalized row before schema binding.

    Attributes:
        record_id: 1-based position among non-empty rows of one fetch.
        values: Normalized header key to cell value, in header order.
    """

    record_id: int
    values: Mapping[str, str]


@dataclass(frozen=True)
class EventRecord:
    """One row of the Events sheet."""

    id: int
    title: str = ""
    date: str = ""
    location: str = ""
    description: str = ""
    extra_fields: Mapping[str, str] = field(default_factory=dict)
    category: Literal[ContentCategory.EVENTS] = field(
        default=ContentCategory.EVENTS, init=False, repr=False
    )

    def to_payload(self) -> dict[str, object]:
        """Render the snapshot JSON object for this record."""
        payload: dict[str, object] = {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "location": self.location,
            "description": self.description,
        }
        payload.update(self.extra_fields)
        return payload


@dataclass(frozen=True)
class GalleryImageRecord:
    """One row of the Gallery sheet.

    ``caption`` is optional; it is omitted from the payload when the sheet
    has no caption column.
    """

    id: int
    imageurl: str = ""
    alt: str = ""
    caption: str | None = None
    extra_fields: Mapping[str, str] = field(default_factory=dict)
    category: Literal[ContentCategory.GALLERY] = field(
        default=ContentCategory.GALLERY, init=False, repr=False
    )

    def to_payload(self) -> dict[str, object]:
        """Render the snapshot JSON object for this record."""
        payload: dict[str, object] = {"id": self.id, "imageurl": self.imageurl, "alt": self.alt}
        if self.caption is not None:
            payload["caption"] = self.caption
        payload.update(self.extra_fields)
        return payload


@dataclass(frozen=True)
class CommitteeMemberRecord:
    """One row of the Committee sheet."""

    id: int
    name: str = ""
    title: str = ""
    photourl: str = ""
    extra_fields: Mapping[str, str] = field(default_factory=dict)
    category: Literal[ContentCategory.COMMITTEE] = field(
        default=ContentCategory.COMMITTEE, init=False, repr=False
    )

    def to_payload(self) -> dict[str, object]:
        """Render the snapshot JSON object for this record."""
        payload: dict[str, object] = {
            "id": self.id,
            "name": self.name,
            "title": self.title,
            "photourl": self.photourl,
        }
        payload.update(self.extra_fields)
        return payload


ContentRecord = Union[EventRecord, GalleryImageRecord, CommitteeMemberRecord]

RECORD_TYPES: dict[ContentCategory, type[ContentRecord]] = {
    ContentCategory.EVENTS: EventRecord,
    ContentCategory.GALLERY: GalleryImageRecord,
    ContentCategory.COMMITTEE: CommitteeMemberRecord,
}

OutcomeStatus = Literal["fetched", "fallback", "bootstrapped"]


@dataclass(frozen=True)
class CategoryOutcome:
    """Result of synchronizing one category.

    Attributes:
        category: Synchronized category.
        status: ``fetched`` for fresh data, ``fallback`` when the previous
            snapshot was kept, ``bootstrapped`` in offline mode.
        record_count: Records now present in the snapshot.
        image_failures: Image references left unresolved in this run.
    """

    category: ContentCategory
    status: OutcomeStatus
    record_count: int
    image_failures: int = 0


@dataclass(frozen=True)
class SyncReport:
    """Aggregate result of one fetch run."""

    outcomes: tuple[CategoryOutcome, ...]
    offline: bool = False

    @property
    def had_errors(self) -> bool:
        """Whether any category had to fall back to its previous snapshot."""
        return any(outcome.status == "fallback" for outcome in self.outcomes)


@dataclass(frozen=True)
class SeedDataset:
    """Rows to push into the spreadsheet, header row first, per category."""

    sheets: Mapping[ContentCategory, RawRows]


@dataclass(frozen=True)
class GalleryItem:
    """Presentation-ready gallery entry."""

    id: int
    src: str
    alt: str
    caption: str | None = None


@dataclass(frozen=True)
class CommitteeItem:
    """Presentation-ready committee entry."""

    name: str
    title: str
    photo: str
