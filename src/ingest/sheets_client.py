"""Google Sheets access for CMS content.

This module builds an authenticated Sheets v4 service from a service
account credential and exposes the read and write calls used by the
fetch and populate workflows.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from core.config import CmsConfig
from core.constants import (
    SHEET_FETCH_COLUMNS,
    SHEET_WRITE_MAX_ROW,
    SHEETS_READONLY_SCOPE,
    SHEETS_WRITE_SCOPE,
)
from core.errors import CmsCredentialError, CmsDependencyError, CmsSourceError
from core.logging_config import get_logger
from core.types import RawRows

_LOGGER = get_logger(__name__)


class SheetsSource(Protocol):
    """Read/write surface consumed by the pipeline and populate flows."""

    def fetch_rows(self, sheet_name: str) -> RawRows | None: ...

    def update_rows(self, sheet_name: str, rows: RawRows) -> int: ...

    def clear_rows_after(self, sheet_name: str, rows: RawRows) -> None: ...


class SheetsSourceClient:
    """Thin wrapper over the Sheets ``spreadsheets.values`` resource."""

    def __init__(self, service: Any, spreadsheet_id: str) -> None:
        """Create a client.

        Args:
            service: Sheets v4 service object from ``googleapiclient``.
            spreadsheet_id: Target spreadsheet identifier.
        """
        self._service = service
        self._spreadsheet_id = spreadsheet_id

    def fetch_rows(self, sheet_name: str) -> RawRows | None:
        """Fetch the raw row grid of one sheet.

        Args:
            sheet_name: Worksheet title.

        Returns:
            Row grid (``[]`` for an empty sheet), or ``None`` when the
            fetch failed for any reason.
        """
        range_spec = f"{sheet_name}!{SHEET_FETCH_COLUMNS}"
        try:
            payload = self._values().get(
                spreadsheetId=self._spreadsheet_id, range=range_spec
            ).execute()
            return _parse_values(payload, range_spec)
        except Exception as error:
            _LOGGER.warning(
                "sheet_fetch_failed",
                sheet_name=sheet_name,
                range=range_spec,
                error=str(error),
            )
            return None

    def update_rows(self, sheet_name: str, rows: RawRows) -> int:
        """Overwrite the top of a sheet with ``rows``.

        Args:
            sheet_name: Worksheet title.
            rows: Header row followed by data rows.

        Returns:
            Number of data rows written.

        Raises:
            CmsSourceError: If the update request fails.
        """
        range_spec = _write_range(sheet_name, 1, rows)
        self._execute(
            self._values().update(
                spreadsheetId=self._spreadsheet_id,
                range=range_spec,
                valueInputOption="RAW",
                body={"values": rows},
            ),
            "values.update",
            range_spec,
        )
        return len(rows) - 1

    def clear_rows_after(self, sheet_name: str, rows: RawRows) -> None:
        """Clear leftover rows below a freshly written block.

        Nothing is cleared when ``rows`` already reach the write limit.

        Raises:
            CmsSourceError: If the clear request fails.
        """
        if len(rows) >= SHEET_WRITE_MAX_ROW:
            return
        range_spec = _write_range(sheet_name, len(rows) + 1, rows)
        self._execute(
            self._values().clear(
                spreadsheetId=self._spreadsheet_id, range=range_spec, body={}
            ),
            "values.clear",
            range_spec,
        )

    def _values(self) -> Any:
        return self._service.spreadsheets().values()

    def _execute(self, request: Any, operation: str, range_spec: str) -> Any:
        try:
            return request.execute()
        except Exception as error:
            raise CmsSourceError(
                f"Sheets {operation} failed for range {range_spec}: {error}. "
                "Check that the service account has edit access to the spreadsheet."
            ) from error


def create_sheets_client(
    config: CmsConfig,
    credential: Mapping[str, Any],
    write_access: bool = False,
) -> SheetsSourceClient:
    """Build an authenticated Sheets client.

    Args:
        config: Runtime configuration with spreadsheet id and timeout.
        credential: Parsed service-account payload.
        write_access: Request the read/write scope instead of read-only.

    Returns:
        Ready-to-use Sheets client.

    Raises:
        CmsDependencyError: If the Google client libraries are missing.
        CmsCredentialError: If authentication setup fails.
    """
    try:
        import google_auth_httplib2
        import httplib2
        from google.oauth2 import service_account
        from googleapiclient.discovery import build
    except ImportError as error:
        raise CmsDependencyError(
            "Sheets access requires google-api-python-client and google-auth. "
            "Install them to fetch CMS content."
        ) from error
    scope = SHEETS_WRITE_SCOPE if write_access else SHEETS_READONLY_SCOPE
    try:
        credentials = service_account.Credentials.from_service_account_info(
            dict(credential), scopes=[scope]
        )
        authorized_http = google_auth_httplib2.AuthorizedHttp(
            credentials, http=httplib2.Http(timeout=config.request_timeout_seconds)
        )
        service = build("sheets", "v4", http=authorized_http, cache_discovery=False)
    except Exception as error:
        raise CmsCredentialError(
            f"Failed to initialize Sheets client for {credential.get('client_email')}: {error}. "
            "Check that the service account key is complete and valid."
        ) from error
    return SheetsSourceClient(service, config.spreadsheet_id)


def column_letter(column_number: int) -> str:
    """Convert a 1-based column number to A1 column letters."""
    letters = ""
    remaining = column_number
    while remaining > 0:
        remaining, offset = divmod(remaining - 1, 26)
        letters = chr(ord("A") + offset) + letters
    return letters


def _write_range(sheet_name: str, start_row: int, rows: RawRows) -> str:
    width = max((len(row) for row in rows), default=1)
    last_column = column_letter(max(width, 1))
    return f"{sheet_name}!A{start_row}:{last_column}{SHEET_WRITE_MAX_ROW}"


def _parse_values(payload: object, range_spec: str) -> RawRows:
    """Validate a ``values.get`` response body.

    Raises:
        CmsSourceError: If the response shape is not a row grid.
    """
    if not isinstance(payload, dict):
        raise CmsSourceError(f"Malformed response for {range_spec}: expected JSON object.")
    values = payload.get("values", [])
    if not isinstance(values, list) or not all(isinstance(row, list) for row in values):
        raise CmsSourceError(f"Malformed response for {range_spec}: 'values' is not a row grid.")
    return [[str(cell) for cell in row] for row in values]
