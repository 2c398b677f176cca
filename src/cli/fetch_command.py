"""Fetch command wiring for the sheets-cms CLI."""

from __future__ import annotations

from typing import Any

from core.config import CmsConfig
from core.errors import CmsError
from core.types import SyncReport
from ingest.pipeline import run_sync


def add_fetch_command(subparsers: Any) -> None:
    """Register fetch subcommand."""
    subparsers.add_parser(
        "fetch",
        help="Fetch CMS content from Google Sheets into JSON snapshots",
    )


def run_fetch_command(config: CmsConfig | None = None) -> int:
    """Run one sync and print per-category status lines.

    Per-category fetch failures keep the previous snapshot and still exit
    zero; only fatal configuration or credential errors exit one.
    """
    try:
        config = config or CmsConfig.from_env()
        report = run_sync(config)
    except CmsError as error:
        print(f"sync_error={error}")
        return 1
    print(render_sync_report(report))
    return 0


def render_sync_report(report: SyncReport) -> str:
    """Render a sync report as key=value status lines."""
    lines = [
        f"category={outcome.category.value}\t"
        f"status={outcome.status}\t"
        f"records={outcome.record_count}\t"
        f"image_failures={outcome.image_failures}"
        for outcome in report.outcomes
    ]
    if report.offline:
        summary = "offline: service account missing, using existing snapshots"
    elif report.had_errors:
        summary = "completed with errors: fallback data used"
    else:
        summary = "completed: all categories fetched"
    lines.append(f"summary={summary}")
    return "\n".join(lines)


def main() -> int:
    """Standalone ``cms-fetch`` entry point."""
    return run_fetch_command()
