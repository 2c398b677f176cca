"""Seed dataset parsing for the populate command.

This module loads and validates the YAML file holding the rows pushed
into the spreadsheet. Keeping the rows in a data file keeps content
maintenance out of the code.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Mapping, cast

from core.constants import SEED_SPEC_VERSION, SHEET_WRITE_MAX_ROW
from core.errors import CmsDependencyError, CmsSeedError
from core.types import ContentCategory, RawRows, SeedDataset

_ROOT_KEYS = frozenset({"version", "sheets"})


def load_seed_dataset(seed_path: Path) -> SeedDataset:
    """Load and validate a YAML seed dataset from disk.

    Args:
        seed_path: File path to the YAML seed file.

    Returns:
        Validated seed dataset.

    Raises:
        CmsDependencyError: If PyYAML is unavailable.
        CmsSeedError: If the file is missing, malformed, or fails schema checks.
    """
    payload = _load_yaml_payload(seed_path)
    root_mapping = _expect_mapping(payload, "seed root")
    unknown_keys = sorted(set(root_mapping) - _ROOT_KEYS)
    if unknown_keys:
        raise CmsSeedError(
            f"Invalid seed root: unsupported keys {unknown_keys}. "
            "Allowed keys are 'version' and 'sheets'."
        )
    _parse_version(root_mapping)
    sheets_mapping = _expect_mapping(root_mapping.get("sheets"), "seed 'sheets'")
    sheets: dict[ContentCategory, RawRows] = {}
    for category_name, rows_payload in sheets_mapping.items():
        category = _parse_category(category_name)
        sheets[category] = _parse_rows(rows_payload, category_name)
    if not sheets:
        raise CmsSeedError("Seed dataset defines no sheets. Add at least one category.")
    return SeedDataset(sheets=sheets)


def _load_yaml_payload(seed_path: Path) -> object:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise CmsDependencyError(
            "Seed dataset support requires PyYAML. Install with 'pip install pyyaml'."
        ) from error
    seed_file = seed_path.expanduser().resolve()
    if not seed_file.exists():
        raise CmsSeedError(
            f"Seed file does not exist at {seed_file}. Set CMS_SEED_PATH to a YAML seed file."
        )
    try:
        payload = cast(object, yaml.safe_load(seed_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise CmsSeedError(
            f"Failed to read seed file at {seed_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise CmsSeedError(
            f"Failed to parse YAML seed file at {seed_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise CmsSeedError(f"Seed file at {seed_file} is empty. Define 'version' and 'sheets'.")
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise CmsSeedError(f"Invalid {context}: expected mapping, got {type(value).__name__}.")
    normalized_mapping: dict[str, object] = {}
    for key, payload in value.items():
        if not isinstance(key, str):
            raise CmsSeedError(
                f"Invalid {context}: expected string keys, got {type(key).__name__}."
            )
        normalized_mapping[key] = payload
    return normalized_mapping


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    version = root_mapping.get("version")
    if version != SEED_SPEC_VERSION:
        raise CmsSeedError(
            f"Unsupported seed version {version!r}. Set 'version: {SEED_SPEC_VERSION}'."
        )
    return SEED_SPEC_VERSION


def _parse_category(category_name: str) -> ContentCategory:
    try:
        return ContentCategory(category_name.strip().lower())
    except ValueError as error:
        supported = ", ".join(category.value for category in ContentCategory)
        raise CmsSeedError(
            f"Unknown seed category '{category_name}'. Supported categories: {supported}."
        ) from error


def _parse_rows(rows_payload: object, category_name: str) -> RawRows:
    if not isinstance(rows_payload, list) or not rows_payload:
        raise CmsSeedError(
            f"Invalid rows for '{category_name}': expected a non-empty list with a header row."
        )
    if len(rows_payload) > SHEET_WRITE_MAX_ROW:
        raise CmsSeedError(
            f"Too many rows for '{category_name}': {len(rows_payload)} exceeds the "
            f"{SHEET_WRITE_MAX_ROW}-row write range. Trim the seed rows, header included."
        )
    rows: RawRows = []
    for row_number, row_payload in enumerate(rows_payload, 1):
        if not isinstance(row_payload, list):
            raise CmsSeedError(
                f"Invalid row {row_number} for '{category_name}': expected a list of cells."
            )
        rows.append([_parse_cell(cell, category_name, row_number) for cell in row_payload])
    if not any(cell.strip() for cell in rows[0]):
        raise CmsSeedError(f"Header row for '{category_name}' is empty. Name each column.")
    return rows


def _parse_cell(cell: object, category_name: str, row_number: int) -> str:
    if cell is None:
        return ""
    if isinstance(cell, (str, int, float, bool, date)):
        return str(cell)
    raise CmsSeedError(
        f"Invalid cell in row {row_number} for '{category_name}': "
        f"expected scalar value, got {type(cell).__name__}."
    )
