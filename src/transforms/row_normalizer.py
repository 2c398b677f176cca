"""Spreadsheet row normalization.

This module turns a raw header + rows grid into staged records with
sequential ids, then binds staged records to per-category schemas.
"""

from __future__ import annotations

import re
from dataclasses import fields
from typing import Sequence

from core.types import (
    RECORD_TYPES,
    ContentCategory,
    ContentRecord,
    StagedRecord,
)

_WHITESPACE_RUN = re.compile(r"\s+")
_RECORD_ATTRIBUTES = frozenset({"id", "extra_fields", "category"})
_GENERATED_KEY = "id"


def normalize_header(label: object) -> str:
    """Normalize a header label into a record key.

    Args:
        label: Raw header cell.

    Returns:
        Trimmed, lowercased key with whitespace runs collapsed to ``_``.
    """
    return _WHITESPACE_RUN.sub("_", _cell_text(label).lower())


def normalize_rows(rows: Sequence[Sequence[object]] | None) -> list[StagedRecord]:
    """Convert a raw row grid into staged records.

    The first row is always the header. Rows whose cells are all empty are
    dropped before numbering, so ids are contiguous over kept rows.

    Args:
        rows: Raw grid as returned by the spreadsheet API.

    Returns:
        Ordered staged records; empty when there are no data rows.
    """
    if not rows or len(rows) < 2:
        return []
    header, *data_rows = rows
    keys = [normalize_header(label) for label in header]
    staged: list[StagedRecord] = []
    for row in data_rows:
        if _is_blank_row(row):
            continue
        values = {key: _cell_at(row, index) for index, key in enumerate(keys)}
        staged.append(StagedRecord(record_id=len(staged) + 1, values=values))
    return staged


def build_records(
    category: ContentCategory,
    staged_records: Sequence[StagedRecord],
) -> list[ContentRecord]:
    """Bind staged records to the fixed schema of a category.

    Columns outside the schema are kept in ``extra_fields`` in sheet order.
    A sheet ``id`` column is ignored in favor of the generated id.

    Args:
        category: Target content category.
        staged_records: Normalized rows.

    Returns:
        Typed records for the category.
    """
    record_type = RECORD_TYPES[category]
    schema_fields = {
        item.name for item in fields(record_type) if item.name not in _RECORD_ATTRIBUTES
    }
    records: list[ContentRecord] = []
    for staged in staged_records:
        known = {key: value for key, value in staged.values.items() if key in schema_fields}
        extra = {
            key: value
            for key, value in staged.values.items()
            if key not in schema_fields and key != _GENERATED_KEY and key
        }
        records.append(record_type(id=staged.record_id, extra_fields=extra, **known))
    return records


def _is_blank_row(row: Sequence[object]) -> bool:
    """Return whether every cell of a row is empty or whitespace."""
    return not any(_cell_text(cell) for cell in row)


def _cell_at(row: Sequence[object], index: int) -> str:
    """Return the trimmed cell at ``index`` or ``""`` for short rows."""
    if index >= len(row):
        return ""
    return _cell_text(row[index])


def _cell_text(cell: object) -> str:
    if cell is None:
        return ""
    return str(cell).strip()
