"""Runtime configuration model for sheets-cms.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DATA_DIR_RELATIVE_PATH,
    DEFAULT_CREDENTIALS_FILE_NAME,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_SEED_FILE_NAME,
    DEFAULT_SPREADSHEET_ID,
    IMAGES_DIR_RELATIVE_PATH,
)
from core.errors import CmsConfigError


@dataclass(frozen=True)
class CmsConfig:
    """Validated runtime configuration.

    Attributes:
        project_root: Site project root holding data and asset directories.
        spreadsheet_id: Google Sheets spreadsheet identifier.
        credentials_path: Service-account JSON credential path.
        seed_path: YAML seed dataset used by the populate command.
        request_timeout_seconds: Per-request network timeout.
    """

    project_root: Path
    spreadsheet_id: str
    credentials_path: Path
    seed_path: Path
    request_timeout_seconds: float

    @property
    def data_dir(self) -> Path:
        """Directory holding the per-category JSON snapshots."""
        return self.project_root / DATA_DIR_RELATIVE_PATH

    @property
    def images_dir(self) -> Path:
        """Directory holding mirrored CMS images."""
        return self.project_root / IMAGES_DIR_RELATIVE_PATH

    @classmethod
    def from_env(cls) -> "CmsConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CmsConfigError: If environment values are invalid.
        """
        project_root = Path(os.getenv("CMS_PROJECT_ROOT", ".")).expanduser().resolve()
        spreadsheet_id = os.getenv("GOOGLE_SHEETS_ID") or DEFAULT_SPREADSHEET_ID
        credentials_value = os.getenv("GOOGLE_SERVICE_ACCOUNT_PATH")
        seed_value = os.getenv("CMS_SEED_PATH")
        timeout_value = os.getenv("CMS_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT_SECONDS))
        return cls(
            project_root=project_root,
            spreadsheet_id=spreadsheet_id,
            credentials_path=_resolve_path(
                credentials_value, project_root, DEFAULT_CREDENTIALS_FILE_NAME
            ),
            seed_path=_resolve_path(seed_value, project_root, DEFAULT_SEED_FILE_NAME),
            request_timeout_seconds=_parse_timeout(timeout_value),
        )


def _resolve_path(raw_value: str | None, project_root: Path, default_name: str) -> Path:
    """Resolve an optional env path, defaulting under the project root."""
    if not raw_value:
        return project_root / default_name
    return Path(raw_value).expanduser().resolve()


def _parse_timeout(raw_value: str) -> float:
    """Parse the request timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive timeout in seconds.

    Raises:
        CmsConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise CmsConfigError(
            "Invalid CMS_REQUEST_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'. "
            "Set CMS_REQUEST_TIMEOUT to a numeric value."
        ) from error
    if timeout <= 0:
        raise CmsConfigError(
            f"Invalid CMS_REQUEST_TIMEOUT value: expected a positive number, got '{raw_value}'."
        )
    return timeout
