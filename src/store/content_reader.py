"""Presentation-side snapshot reading.

This module loads category snapshots as typed records and resolves image
references for display: mirrored ``cms/`` files map to local asset paths,
external URLs and symbolic identifiers pass through unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from core.config import CmsConfig
from core.constants import LOCAL_IMAGE_PREFIX
from core.logging_config import get_logger
from core.types import (
    CommitteeItem,
    CommitteeMemberRecord,
    ContentCategory,
    EventRecord,
    GalleryImageRecord,
    GalleryItem,
)
from store.snapshot_store import SnapshotStore

_LOGGER = get_logger(__name__)

_EVENT_KEYS = frozenset({"id", "title", "date", "location", "description"})


def resolve_image_source(value: str, images_dir: Path) -> str:
    """Resolve a stored image reference into a displayable source.

    Args:
        value: Image field value from a snapshot.
        images_dir: Local mirror directory.

    Returns:
        Local file path for mirrored images, ``""`` for missing mirror
        files, otherwise the value unchanged.
    """
    if not value:
        return ""
    if value.startswith(LOCAL_IMAGE_PREFIX):
        image_path = images_dir / value[len(LOCAL_IMAGE_PREFIX):]
        if image_path.is_file():
            return str(image_path)
        _LOGGER.warning("cms_image_missing", reference=value, path=str(image_path))
        return ""
    return value


def load_events(config: CmsConfig) -> list[EventRecord]:
    """Load the events snapshot."""
    payloads = SnapshotStore(config).load_fallback(ContentCategory.EVENTS)
    return [
        EventRecord(
            id=_payload_id(payload),
            title=_text(payload, "title"),
            date=_text(payload, "date"),
            location=_text(payload, "location"),
            description=_text(payload, "description"),
            extra_fields=_extra_fields(payload, _EVENT_KEYS),
        )
        for payload in payloads
    ]


def load_gallery(config: CmsConfig) -> list[GalleryItem]:
    """Load gallery entries with resolved image sources."""
    payloads = SnapshotStore(config).load_fallback(ContentCategory.GALLERY)
    items: list[GalleryItem] = []
    for payload in payloads:
        record = GalleryImageRecord(
            id=_payload_id(payload),
            imageurl=_text(payload, "imageurl"),
            alt=_text(payload, "alt"),
            caption=_optional_text(payload, "caption"),
        )
        items.append(
            GalleryItem(
                id=record.id,
                src=resolve_image_source(record.imageurl, config.images_dir),
                alt=record.alt,
                caption=record.caption,
            )
        )
    return items


def load_committee(config: CmsConfig) -> list[CommitteeItem]:
    """Load committee entries with resolved photo sources."""
    payloads = SnapshotStore(config).load_fallback(ContentCategory.COMMITTEE)
    items: list[CommitteeItem] = []
    for payload in payloads:
        record = CommitteeMemberRecord(
            id=_payload_id(payload),
            name=_text(payload, "name"),
            title=_text(payload, "title"),
            photourl=_text(payload, "photourl"),
        )
        items.append(
            CommitteeItem(
                name=record.name,
                title=record.title,
                photo=resolve_image_source(record.photourl, config.images_dir),
            )
        )
    return items


def _payload_id(payload: Mapping[str, Any]) -> int:
    try:
        return int(payload.get("id", 0))
    except (TypeError, ValueError):
        return 0


def _text(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    return "" if value is None else str(value)


def _optional_text(payload: Mapping[str, Any], key: str) -> str | None:
    value = payload.get(key)
    return None if value is None else str(value)


def _extra_fields(payload: Mapping[str, Any], known_keys: frozenset[str]) -> dict[str, str]:
    return {key: _text(payload, key) for key in payload if key not in known_keys}
