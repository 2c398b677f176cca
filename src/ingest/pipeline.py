"""Fetch orchestration for CMS content.

This module drives one build-time sync run: it checks for a credential,
fetches each category from the spreadsheet, normalizes rows, mirrors
images, and writes snapshots, falling back to the last persisted snapshot
whenever a category cannot be fetched.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from core.config import CmsConfig
from core.credentials import credential_available, load_service_account
from core.logging_config import get_logger
from core.types import CategoryOutcome, ContentCategory, SyncReport
from ingest.sheets_client import SheetsSource, create_sheets_client
from store.snapshot_store import SnapshotStore
from transforms.image_resolver import ImageResolver
from transforms.row_normalizer import build_records, normalize_rows

_LOGGER = get_logger(__name__)

ClientFactory = Callable[[CmsConfig, Mapping[str, Any]], SheetsSource]


class SyncPipelineRunner:
    """Sequential per-category fetch runner."""

    def __init__(
        self,
        config: CmsConfig,
        client_factory: ClientFactory | None = None,
        resolver: ImageResolver | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or create_sheets_client
        self._resolver = resolver
        self._store = SnapshotStore(config)

    def run(self) -> SyncReport:
        """Execute a sync run.

        Returns:
            Per-category outcomes.

        Raises:
            CmsCredentialError: If the credential exists but is unusable.
            CmsDependencyError: If Google client libraries are missing.
            CmsStoreError: If a snapshot cannot be written.
        """
        if not credential_available(self._config):
            return self._run_offline()
        credential = load_service_account(self._config.credentials_path)
        _LOGGER.info("service_account_loaded", client_email=credential["client_email"])
        client = self._client_factory(self._config, credential)
        resolver = self._resolver or ImageResolver(self._config)
        outcomes = tuple(
            self._sync_category(client, resolver, category) for category in ContentCategory
        )
        report = SyncReport(outcomes=outcomes)
        _log_sync_completion(report)
        return report

    def _run_offline(self) -> SyncReport:
        _LOGGER.warning(
            "service_account_missing",
            credentials_path=str(self._config.credentials_path),
        )
        self._config.images_dir.mkdir(parents=True, exist_ok=True)
        outcomes: list[CategoryOutcome] = []
        for category in ContentCategory:
            self._store.ensure_snapshot(category)
            existing = self._store.load_fallback(category)
            outcomes.append(
                CategoryOutcome(
                    category=category, status="bootstrapped", record_count=len(existing)
                )
            )
        return SyncReport(outcomes=tuple(outcomes), offline=True)

    def _sync_category(
        self,
        client: SheetsSource,
        resolver: ImageResolver,
        category: ContentCategory,
    ) -> CategoryOutcome:
        spec = category.spec
        _LOGGER.info(
            "category_fetch_started", category=category.value, sheet_name=spec.sheet_name
        )
        rows = client.fetch_rows(spec.sheet_name)
        if rows is None:
            self._store.ensure_snapshot(category)
            fallback = self._store.load_fallback(category)
            _LOGGER.warning(
                "fallback_loaded", category=category.value, record_count=len(fallback)
            )
            return CategoryOutcome(
                category=category, status="fallback", record_count=len(fallback)
            )
        records = build_records(category, normalize_rows(rows))
        image_failures = 0
        if spec.image_field:
            resolution = resolver.resolve_records(records, spec.image_field)
            records = resolution.records
            image_failures = resolution.failures
        self._store.write_snapshot(category, records)
        return CategoryOutcome(
            category=category,
            status="fetched",
            record_count=len(records),
            image_failures=image_failures,
        )


def run_sync(
    config: CmsConfig,
    client_factory: ClientFactory | None = None,
    resolver: ImageResolver | None = None,
) -> SyncReport:
    """Run the fetch pipeline for every content category.

    Args:
        config: Runtime configuration.
        client_factory: Optional Sheets client builder.
        resolver: Optional image resolver.

    Returns:
        Sync report with per-category outcomes.
    """
    runner = SyncPipelineRunner(config, client_factory=client_factory, resolver=resolver)
    return runner.run()


def _log_sync_completion(report: SyncReport) -> None:
    """Log run completion with per-category counts."""
    _LOGGER.info(
        "sync_completed",
        had_errors=report.had_errors,
        categories={outcome.category.value: outcome.status for outcome in report.outcomes},
        record_counts={
            outcome.category.value: outcome.record_count for outcome in report.outcomes
        },
    )
