"""Public SDK surface for sheets-cms.

This module provides a stable import path for build scripts.
It re-exports the sync entry points and typed models.
"""

from __future__ import annotations

from core.config import CmsConfig
from core.types import (
    CommitteeItem,
    CommitteeMemberRecord,
    ContentCategory,
    EventRecord,
    GalleryImageRecord,
    GalleryItem,
    SyncReport,
)
from ingest.pipeline import run_sync
from ingest.populate import populate_sheets
from store.content_reader import load_committee, load_events, load_gallery
from store.snapshot_store import SnapshotStore

__all__ = [
    "CmsConfig",
    "CommitteeItem",
    "CommitteeMemberRecord",
    "ContentCategory",
    "EventRecord",
    "GalleryImageRecord",
    "GalleryItem",
    "SnapshotStore",
    "SyncReport",
    "load_committee",
    "load_events",
    "load_gallery",
    "populate_sheets",
    "run_sync",
]
