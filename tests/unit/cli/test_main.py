"""Unit tests for CLI command handling."""

from __future__ import annotations

from cli.main import main
from tests.fixture_paths import fixture_path


def test_cli_run_prints_completion_report(tmp_path, capsys) -> None:
    """CLI run should print totals for the ingested export."""
    exit_code = main(
        ["--data-root", str(tmp_path), "run", str(fixture_path("exports/flips_export.csv"))]
    )
    output = capsys.readouterr().out

    assert exit_code == 0 and "total_flips=3" in output and "net_worth=10880.0" in output


def test_cli_ingest_prints_counts(tmp_path, capsys) -> None:
    """CLI ingest should print accepted and skipped counts."""
    exit_code = main(
        ["--data-root", str(tmp_path), "ingest", str(fixture_path("exports/flips_export.csv"))]
    )
    output = capsys.readouterr().out

    assert exit_code == 0 and "accepted=3" in output


def test_cli_meta_on_empty_root(tmp_path, capsys) -> None:
    """CLI meta should succeed with no partitions yet."""
    exit_code = main(["--data-root", str(tmp_path), "meta"])
    output = capsys.readouterr().out

    assert exit_code == 0 and "total_flips=0" in output


def test_cli_missing_source_returns_error_code(tmp_path, capsys) -> None:
    """Missing exports should produce exit code 1 and an error line."""
    exit_code = main(["--data-root", str(tmp_path), "ingest", str(tmp_path / "absent.csv")])
    output = capsys.readouterr().out

    assert exit_code == 1 and output.startswith("error=")


def test_cli_invalid_settings_file_returns_error_code(tmp_path, capsys) -> None:
    """Unknown settings keys should produce exit code 1."""
    settings_path = tmp_path / "tracker.yaml"
    settings_path.write_text("unknown_key: 1\n", encoding="utf-8")

    exit_code = main(["--config", str(settings_path), "meta"])
    capsys.readouterr()

    assert exit_code == 1


def test_cli_undecodable_export_returns_error_code(tmp_path, capsys) -> None:
    """An export with an oversized cell should exit 1 instead of crashing."""
    source_path = tmp_path / "export.csv"
    source_path.write_text("Item,Profit\n" + "x" * 200_000 + ",1\n", encoding="utf-8")

    exit_code = main(["--data-root", str(tmp_path / "data"), "ingest", str(source_path)])
    capsys.readouterr()

    assert exit_code == 1
