"""Populate command wiring for the sheets-cms CLI."""

from __future__ import annotations

from typing import Any

from core.config import CmsConfig
from core.errors import CmsError
from core.seed_dataset import load_seed_dataset
from ingest.populate import populate_sheets


def add_populate_command(subparsers: Any) -> None:
    """Register populate subcommand."""
    subparsers.add_parser(
        "populate",
        help="Push the seed dataset file into Google Sheets (write access)",
    )


def run_populate_command(config: CmsConfig | None = None) -> int:
    """Push the configured seed dataset; any failure exits one."""
    try:
        config = config or CmsConfig.from_env()
        seed = load_seed_dataset(config.seed_path)
        written = populate_sheets(config, seed)
    except CmsError as error:
        print(f"populate_error={error}")
        return 1
    for category, row_count in written.items():
        print(f"sheet={category.spec.sheet_name}\trows={row_count}")
    return 0


def main() -> int:
    """Standalone ``cms-populate`` entry point."""
    return run_populate_command()
