"""Seed dataset upload to the spreadsheet.

This module pushes a validated seed dataset into the CMS spreadsheet,
overwriting each seeded sheet and clearing rows left from older content.
"""

from __future__ import annotations

from functools import partial

from core.config import CmsConfig
from core.credentials import credential_available, load_service_account
from core.errors import CmsCredentialError
from core.logging_config import get_logger
from core.types import ContentCategory, SeedDataset
from ingest.pipeline import ClientFactory
from ingest.sheets_client import create_sheets_client

_LOGGER = get_logger(__name__)


def populate_sheets(
    config: CmsConfig,
    seed: SeedDataset,
    client_factory: ClientFactory | None = None,
) -> dict[ContentCategory, int]:
    """Write seed rows into every seeded sheet.

    Args:
        config: Runtime configuration.
        seed: Rows per category, header first.
        client_factory: Optional Sheets client builder.

    Returns:
        Data row count written per category.

    Raises:
        CmsCredentialError: If the credential is missing or unusable.
        CmsSourceError: If any Sheets write fails.
    """
    if not credential_available(config):
        raise CmsCredentialError(
            f"Service account file not found at {config.credentials_path}. "
            "Set GOOGLE_SERVICE_ACCOUNT_PATH to a key with edit access."
        )
    credential = load_service_account(config.credentials_path)
    _LOGGER.info("service_account_loaded", client_email=credential["client_email"])
    factory = client_factory or partial(create_sheets_client, write_access=True)
    client = factory(config, credential)
    written: dict[ContentCategory, int] = {}
    for category, rows in seed.sheets.items():
        sheet_name = category.spec.sheet_name
        written[category] = client.update_rows(sheet_name, rows)
        client.clear_rows_after(sheet_name, rows)
        _LOGGER.info("sheet_populated", sheet_name=sheet_name, row_count=written[category])
    return written
