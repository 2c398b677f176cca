"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import CmsConfig
from core.constants import DEFAULT_SPREADSHEET_ID
from core.errors import CmsConfigError


def test_from_env_defaults_paths_under_project_root(
    monkeypatch: pytest.MonkeyPatch, tmp_path
) -> None:
    """Config should derive data, image, and credential paths from the root."""
    monkeypatch.setenv("CMS_PROJECT_ROOT", str(tmp_path))
    monkeypatch.delenv("GOOGLE_SERVICE_ACCOUNT_PATH", raising=False)
    monkeypatch.delenv("GOOGLE_SHEETS_ID", raising=False)

    config = CmsConfig.from_env()

    assert (
        config.credentials_path == tmp_path / "service-account-key.json"
        and config.data_dir == tmp_path / "src" / "data"
        and config.images_dir == tmp_path / "src" / "assets" / "images" / "cms"
        and config.spreadsheet_id == DEFAULT_SPREADSHEET_ID
    )


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Explicit env values should override defaults."""
    key_path = tmp_path / "keys" / "sa.json"
    monkeypatch.setenv("GOOGLE_SHEETS_ID", "sheet-123")
    monkeypatch.setenv("GOOGLE_SERVICE_ACCOUNT_PATH", str(key_path))
    monkeypatch.setenv("CMS_REQUEST_TIMEOUT", "12.5")

    config = CmsConfig.from_env()

    assert (
        config.spreadsheet_id == "sheet-123"
        and config.credentials_path == key_path.resolve()
        and config.request_timeout_seconds == 12.5
    )


@pytest.mark.parametrize("raw_value", ["not-a-number", "0", "-3"])
def test_from_env_raises_for_invalid_timeout(
    monkeypatch: pytest.MonkeyPatch, raw_value: str
) -> None:
    """Config should fail for non-numeric or non-positive timeouts."""
    monkeypatch.setenv("CMS_REQUEST_TIMEOUT", raw_value)

    with pytest.raises(CmsConfigError):
        CmsConfig.from_env()
