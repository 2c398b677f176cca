"""Unit tests for spreadsheet row normalization."""

from __future__ import annotations

import pytest

from core.types import CommitteeMemberRecord, ContentCategory, EventRecord, StagedRecord
from tests.fixture_paths import load_json_fixture
from transforms.row_normalizer import build_records, normalize_header, normalize_rows


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Image URL ", "image_url"),
        ("  Photo\tUrl", "photo_url"),
        ("imageUrl", "imageurl"),
        ("Event   Start  Date", "event_start_date"),
    ],
)
def test_normalize_header_trims_lowercases_and_collapses(label: str, expected: str) -> None:
    """Header keys should be trimmed, lowercased, and underscore-joined."""
    assert normalize_header(label) == expected


@pytest.mark.parametrize("rows", [None, [], [["title", "date"]]])
def test_normalize_rows_without_data_rows_is_empty(rows) -> None:
    """Grids with fewer than two rows should yield no records."""
    assert normalize_rows(rows) == []


def test_normalize_rows_skips_blank_rows_before_numbering() -> None:
    """Blank rows should not consume ids."""
    rows = [["k", "v"], ["a", "1"], ["", "  "], ["b", "2"]]

    staged = normalize_rows(rows)

    assert [(item.record_id, item.values["k"]) for item in staged] == [(1, "a"), (2, "b")]


def test_normalize_rows_pads_short_rows_with_empty_strings() -> None:
    """Cells missing from short rows should become empty strings."""
    staged = normalize_rows([["Title", "Date", "Location"], [" Yoga Day "]])

    assert staged[0].values == {"title": "Yoga Day", "date": "", "location": ""}


def test_normalize_rows_reads_fixture_grid() -> None:
    """Fixture grid should produce contiguous ids over non-empty rows."""
    rows = load_json_fixture("sheets/gallery_rows.json")

    staged = normalize_rows(rows)

    assert [item.record_id for item in staged] == [1, 2, 3]


def test_build_records_binds_schema_and_keeps_extra_columns() -> None:
    """Schema columns become fields; others are kept as extra fields."""
    staged = [StagedRecord(record_id=1, values={"title": "Teej", "rsvp": "yes"})]

    records = build_records(ContentCategory.EVENTS, staged)

    assert records == [EventRecord(id=1, title="Teej", extra_fields={"rsvp": "yes"})]


def test_build_records_ignores_sheet_id_column() -> None:
    """Generated ids should win over an ``id`` column in the sheet."""
    staged = normalize_rows([["ID", "Name", "Title"], ["99", "Reema", "Chairperson"]])

    records = build_records(ContentCategory.COMMITTEE, staged)

    assert records == [CommitteeMemberRecord(id=1, name="Reema", title="Chairperson")]


def test_build_records_keeps_columns_named_like_record_attributes() -> None:
    """``category`` and ``extra_fields`` columns should land in extra fields."""
    staged = normalize_rows([["Title", "Category", "Extra Fields"], ["Teej", "Festival", "x"]])

    records = build_records(ContentCategory.EVENTS, staged)

    assert records[0].extra_fields == {"category": "Festival", "extra_fields": "x"}
    assert records[0].to_payload()["category"] == "Festival"
