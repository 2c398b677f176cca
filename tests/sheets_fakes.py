"""In-process fakes for Sheets and HTTP access in tests."""

from __future__ import annotations

import shutil
from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping

from core.config import CmsConfig
from core.types import RawRows
from tests.fixture_paths import fixture_path


def build_config(tmp_path: Path, with_credential: bool = False) -> CmsConfig:
    """Build a config rooted at ``tmp_path``.

    Args:
        tmp_path: Temporary project root.
        with_credential: Copy a valid service-account fixture into place.

    Returns:
        Config pointing all paths into ``tmp_path``.
    """
    config = replace(
        CmsConfig.from_env(),
        project_root=tmp_path,
        credentials_path=tmp_path / "service-account-key.json",
        seed_path=tmp_path / "cms_seed.yaml",
    )
    if with_credential:
        shutil.copy(fixture_path("credentials/service_account.json"), config.credentials_path)
    return config


class FakeSheetsClient:
    """Sheets client double keyed by sheet name; ``None`` simulates failure."""

    def __init__(self, sheets: Mapping[str, RawRows | None] | None = None) -> None:
        self.sheets = dict(sheets or {})
        self.fetched: list[str] = []
        self.updates: list[tuple[str, RawRows]] = []
        self.clears: list[tuple[str, int]] = []

    def fetch_rows(self, sheet_name: str) -> RawRows | None:
        self.fetched.append(sheet_name)
        return self.sheets.get(sheet_name)

    def update_rows(self, sheet_name: str, rows: RawRows) -> int:
        self.updates.append((sheet_name, rows))
        return len(rows) - 1

    def clear_rows_after(self, sheet_name: str, rows: RawRows) -> None:
        self.clears.append((sheet_name, len(rows) + 1))


def client_factory_for(client: Any) -> Any:
    """Return a pipeline client factory that always yields ``client``."""
    return lambda config, credential: client


class FakeResponse:
    """Minimal streamed HTTP response."""

    def __init__(
        self,
        status_code: int,
        body: bytes = b"",
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.headers = dict(headers or {})
        self._body = body
        self.closed = False

    def iter_content(self, chunk_size: int = 1) -> Any:
        for start in range(0, len(self._body), chunk_size):
            yield self._body[start : start + chunk_size]

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """HTTP session double returning queued responses per URL."""

    def __init__(self, responses: Mapping[str, list[FakeResponse]] | None = None) -> None:
        self.responses = {url: list(queue) for url, queue in (responses or {}).items()}
        self.requested: list[str] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.requested.append(url)
        queue = self.responses.get(url)
        if not queue:
            return FakeResponse(404)
        return queue.pop(0)
