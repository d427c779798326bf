"""Flip tracker CLI entry points.
This module exposes commands for ingest and the aggregation steps.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from core.config import TrackerConfig
from core.errors import FlipTrackerError
from core.types import IngestResult, PipelineReport
from store.tracker_sdk import FlipTrackerClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="fliptracker", description="Flip tracker CLI")
    parser.add_argument("--data-root", help="Override FLIP_TRACKER_DATA_ROOT for this command")
    parser.add_argument("--config", help="Optional YAML settings file overlaying env values")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_run_command(subparsers)
    _add_ingest_command(subparsers)
    subparsers.add_parser("item-stats", help="Rebuild the per-item stats CSV")
    subparsers.add_parser("summaries", help="Rebuild every per-day summary JSON")
    subparsers.add_parser("meta", help="Rebuild the meta summary and summary index")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the flip tracker CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.data_root, args.config)
        return _dispatch(client, args)
    except FlipTrackerError as error:
        print(f"error={error}")
        return 1


def _dispatch(client: FlipTrackerClient, args: argparse.Namespace) -> int:
    if args.command == "run":
        _print_pipeline_report(client.run_all(args.source))
        return 0
    if args.command == "ingest":
        _print_ingest_result(client.ingest(args.source))
        return 0
    if args.command == "item-stats":
        print(f"item_count={len(client.build_item_stats())}")
        return 0
    if args.command == "summaries":
        print(f"summary_count={len(client.build_day_summaries())}")
        return 0
    if args.command == "meta":
        meta = client.write_meta()
        summary_keys = client.write_summary_index()
        print(f"total_flips={meta.total_flip_count}")
        print(f"total_profit={meta.total_profit}")
        print(f"net_worth={meta.net_worth}")
        print(f"indexed_summaries={len(summary_keys)}")
        return 0
    raise FlipTrackerError(f"Unsupported command: {args.command}")


def _build_client(data_root: str | None, settings_path: str | None) -> FlipTrackerClient:
    """Build SDK client with optional settings file and data-root override.

    Args:
        data_root: Optional override path, applied after the settings file.
        settings_path: Optional YAML settings path.

    Returns:
        Configured SDK client.
    """
    config = TrackerConfig.from_env()
    if settings_path:
        config = config.with_settings_file(settings_path)
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return FlipTrackerClient(config)


def _print_ingest_result(result: IngestResult) -> None:
    print(f"accepted={result.accepted_count}")
    print(f"duplicates={result.duplicate_count}")
    print(f"deleted={result.deleted_count}")
    print(f"before_cutoff={result.before_cutoff_count}")
    print(f"unclosed={result.unclosed_count}")
    print(f"index_size={result.index_size}")
    print(f"archive_path={result.archive_path or '-'}")


def _print_pipeline_report(report: PipelineReport) -> None:
    print(f"new_flips={report.ingest.accepted_count}")
    print(f"total_flips={report.meta.total_flip_count}")
    print(f"total_profit={report.meta.total_profit}")
    print(f"net_worth={report.meta.net_worth}")
    print(f"item_count={report.item_count}")
    print(f"summaries_written={report.summary_count}")
    print(f"last_updated={report.meta.last_updated}")


def _add_run_command(subparsers: Any) -> None:
    """Register run subcommand."""
    parser = subparsers.add_parser("run", help="Ingest an export and rebuild every output")
    parser.add_argument("source", nargs="?", help="Export CSV path; defaults to FLIP_TRACKER_SOURCE")


def _add_ingest_command(subparsers: Any) -> None:
    """Register ingest subcommand."""
    parser = subparsers.add_parser("ingest", help="Ingest an export into date partitions")
    parser.add_argument("source", nargs="?", help="Export CSV path; defaults to FLIP_TRACKER_SOURCE")
