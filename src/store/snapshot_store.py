"""Per-category JSON snapshot persistence.

This module owns the data directory: it writes pretty-printed snapshot
files after a successful fetch and reads the last persisted snapshot back
as fallback data when the remote source is unavailable.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Sequence

from core.config import CmsConfig
from core.constants import SNAPSHOT_JSON_INDENT
from core.errors import CmsStoreError
from core.logging_config import get_logger
from core.types import ContentCategory, ContentRecord

_LOGGER = get_logger(__name__)


class SnapshotStore:
    """Snapshot reader and writer for content categories."""

    def __init__(self, config: CmsConfig) -> None:
        """Initialize store and ensure the data directory exists.

        Args:
            config: Runtime configuration.
        """
        self._data_dir = config.data_dir
        self._data_dir.mkdir(parents=True, exist_ok=True)

    def snapshot_path(self, category: ContentCategory) -> Path:
        """Return the snapshot file path for a category."""
        return self._data_dir / category.spec.file_name

    def write_snapshot(
        self,
        category: ContentCategory,
        records: Sequence[ContentRecord],
    ) -> Path:
        """Replace a category snapshot with ``records``.

        Args:
            category: Target category.
            records: Records to persist, in order.

        Returns:
            Written snapshot path.

        Raises:
            CmsStoreError: If the file cannot be written.
        """
        payload = [record.to_payload() for record in records]
        snapshot_path = self.snapshot_path(category)
        _write_json_atomically(snapshot_path, payload)
        _LOGGER.info(
            "snapshot_written",
            category=category.value,
            path=str(snapshot_path),
            record_count=len(payload),
        )
        return snapshot_path

    def load_fallback(self, category: ContentCategory) -> list[dict[str, Any]]:
        """Load the last persisted snapshot for a category.

        Missing, unreadable, and malformed files all yield an empty list.

        Args:
            category: Target category.

        Returns:
            Previously persisted record payloads.
        """
        snapshot_path = self.snapshot_path(category)
        if not snapshot_path.exists():
            return []
        try:
            payload = json.loads(snapshot_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
            _LOGGER.warning(
                "fallback_unreadable",
                category=category.value,
                path=str(snapshot_path),
                error=str(error),
            )
            return []
        if not isinstance(payload, list):
            _LOGGER.warning(
                "fallback_unreadable",
                category=category.value,
                path=str(snapshot_path),
                error="expected JSON array at top level",
            )
            return []
        return [item for item in payload if isinstance(item, dict)]

    def ensure_snapshot(self, category: ContentCategory) -> bool:
        """Create an empty snapshot when none exists.

        Args:
            category: Target category.

        Returns:
            True when a new empty snapshot was written.
        """
        snapshot_path = self.snapshot_path(category)
        if snapshot_path.exists():
            return False
        _write_json_atomically(snapshot_path, [])
        _LOGGER.info("snapshot_bootstrapped", category=category.value, path=str(snapshot_path))
        return True


def _write_json_atomically(target_path: Path, payload: list[Any]) -> None:
    """Write JSON to a sibling temp file and rename it over the target.

    Raises:
        CmsStoreError: If writing or renaming fails.
    """
    serialized = json.dumps(payload, indent=SNAPSHOT_JSON_INDENT, ensure_ascii=False) + "\n"
    file_descriptor, temp_name = tempfile.mkstemp(
        prefix=f".{target_path.name}.", suffix=".tmp", dir=target_path.parent
    )
    temp_path = Path(temp_name)
    try:
        with os.fdopen(file_descriptor, "w", encoding="utf-8") as handle:
            handle.write(serialized)
        os.replace(temp_path, target_path)
    except OSError as error:
        temp_path.unlink(missing_ok=True)
        raise CmsStoreError(
            f"Failed to write snapshot at {target_path}: {error}. "
            "Check that the data directory is writable."
        ) from error
