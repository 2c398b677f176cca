"""Service-account credential loading.

A missing credential file is a recognized configuration state that puts
the fetch pipeline into offline mode. A present but unusable file is fatal.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.config import CmsConfig
from core.errors import CmsCredentialError


def credential_available(config: CmsConfig) -> bool:
    """Return whether the configured credential file exists."""
    return config.credentials_path.is_file()


def load_service_account(credentials_path: Path) -> dict[str, Any]:
    """Read and validate a service-account JSON credential.

    Args:
        credentials_path: Path to the credential file.

    Returns:
        Parsed credential payload containing ``client_email``.

    Raises:
        CmsCredentialError: If the file is unreadable, malformed, or
            lacks a ``client_email`` field.
    """
    try:
        raw_text = credentials_path.read_text(encoding="utf-8")
    except OSError as error:
        raise CmsCredentialError(
            f"Failed to read service account file at {credentials_path}: {error}. "
            "Check the GOOGLE_SERVICE_ACCOUNT_PATH setting and file permissions."
        ) from error
    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as error:
        raise CmsCredentialError(
            f"Failed to parse service account file at {credentials_path}: {error.msg}. "
            "Download a fresh JSON key for the service account."
        ) from error
    if not isinstance(payload, dict):
        raise CmsCredentialError(
            f"Invalid service account file at {credentials_path}: expected a JSON object."
        )
    client_email = payload.get("client_email")
    if not isinstance(client_email, str) or not client_email.strip():
        raise CmsCredentialError(
            f"Invalid service account file at {credentials_path}: missing 'client_email'. "
            "Use a service-account key, not an OAuth client secret."
        )
    return payload
