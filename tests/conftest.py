"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_CMS_ENV_VARS = (
    "CMS_PROJECT_ROOT",
    "CMS_SEED_PATH",
    "CMS_REQUEST_TIMEOUT",
    "GOOGLE_SHEETS_ID",
    "GOOGLE_SERVICE_ACCOUNT_PATH",
)


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _isolate_cms_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer shell settings from leaking into config parsing."""
    for name in _CMS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
