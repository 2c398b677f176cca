"""sheets-cms CLI entry points.
This module exposes the fetch and populate commands.
Configuration comes from environment variables only.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from cli.fetch_command import add_fetch_command, run_fetch_command
from cli.populate_command import add_populate_command, run_populate_command


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="sheets-cms",
        description="Google Sheets CMS sync for static site builds",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_fetch_command(subparsers)
    add_populate_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the sheets-cms CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "fetch":
        return run_fetch_command()
    if args.command == "populate":
        return run_populate_command()
    parser.error(f"Unsupported command: {args.command}")
    return 2
