"""Unit tests for CLI command behavior."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner, Result

from jconvert.cli import cli as cli_module

runner = CliRunner()


def _convert(*args: str) -> Result:
    return runner.invoke(cli_module.app, ["convert", *args])


def test_help_shows_commands() -> None:
    """List the available subcommands in top-level help."""
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    assert "convert" in result.output
    assert "doctor" in result.output


def test_convert_merges_folder(sample_tree: Path, tmp_path: Path) -> None:
    """Write every document to the output and report the save."""
    out = tmp_path / "result.jsonl"
    result = _convert("-i", str(sample_tree), "-o", str(out), "-j", "2")

    assert result.exit_code == 0, result.output
    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 6
    assert all(json.loads(line) is not None for line in lines)
    assert "Conversion summary" in result.output
    assert "Saved:" in result.output


def test_convert_with_pattern_and_fields(sample_tree: Path, tmp_path: Path) -> None:
    """Filter by name and reduce records to selected fields."""
    out = tmp_path / "result.jsonl"
    result = _convert(
        "-i", str(sample_tree), "-o", str(out), "-p", "*_SUM_*", "--fields", "id,value"
    )

    assert result.exit_code == 0, result.output
    records = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
    assert records == [{"id": 3, "value": 100}, {"id": 4, "value": 200}]


def test_failures_do_not_change_exit_code(mixed_tree: Path, tmp_path: Path) -> None:
    """Report per-file failures while still exiting successfully."""
    out = tmp_path / "result.jsonl"
    log_path = tmp_path / "errors.log"
    result = _convert("-i", str(mixed_tree), "-o", str(out), "--log", str(log_path), "-v")

    assert result.exit_code == 0, result.output
    assert "Failed files:" in result.output
    assert "invalid.json" in result.output
    assert "2 files failed." in result.output
    assert "Error log written:" in result.output
    assert "Total errors: 2" in log_path.read_text(encoding="utf-8")
    assert out.read_text(encoding="utf-8") == '{"id":1}\n'


def test_dry_run_lists_files_without_writing(sample_tree: Path, tmp_path: Path) -> None:
    """Print the file list and leave the output untouched."""
    out = tmp_path / "result.jsonl"
    result = _convert("-i", str(sample_tree), "-o", str(out), "--dry-run")

    assert result.exit_code == 0, result.output
    assert "Files to process:" in result.output
    assert "6 files would be processed." in result.output
    assert not out.exists()


def test_validate_only_reports_invalid_files(mixed_tree: Path, tmp_path: Path) -> None:
    """Summarize validity without producing output."""
    out = tmp_path / "result.jsonl"
    result = _convert("-i", str(mixed_tree), "-o", str(out), "--validate-only")

    assert result.exit_code == 0, result.output
    assert "Validation summary" in result.output
    assert "2 files invalid." in result.output
    assert not out.exists()


def test_validate_only_all_valid(sample_tree: Path) -> None:
    """Confirm a clean folder."""
    result = _convert("-i", str(sample_tree), "--validate-only")
    assert result.exit_code == 0, result.output
    assert "All files are valid." in result.output


def test_no_matching_files(sample_tree: Path, tmp_path: Path) -> None:
    """Warn when discovery finds nothing."""
    out = tmp_path / "result.jsonl"
    result = _convert("-i", str(sample_tree), "-o", str(out), "-p", "nomatch*")
    assert result.exit_code == 0, result.output
    assert "No JSON files found." in result.output
    assert not out.exists()


def test_error_mode_with_existing_output(sample_tree: Path, tmp_path: Path) -> None:
    """Abort without modifying an existing output in error mode."""
    out = tmp_path / "result.jsonl"
    out.write_text("keep\n", encoding="utf-8")
    result = _convert("-i", str(sample_tree), "-o", str(out), "-m", "error")

    assert result.exit_code == 1
    assert "Output file already exists" in result.output
    assert out.read_text(encoding="utf-8") == "keep\n"


def test_missing_input_folder(tmp_path: Path) -> None:
    """Fail with a readable message for a missing input folder."""
    result = _convert("-i", str(tmp_path / "missing"))
    assert result.exit_code == 1
    assert "Input directory not found" in result.output


def test_invalid_pattern_exit_code(sample_tree: Path) -> None:
    """Exit with a usage code for an uncompilable pattern."""
    result = _convert("-i", str(sample_tree), "-p", "[invalid")
    assert result.exit_code == 2
    assert "Invalid pattern" in result.output


def test_invalid_thread_count(sample_tree: Path) -> None:
    """Reject a zero-sized worker pool as bad configuration."""
    result = _convert("-i", str(sample_tree), "-j", "0")
    assert result.exit_code == 2
    assert "InvalidConfigError" in result.output


def test_unexpected_error_is_reported(
    sample_tree: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Render unexpected crashes as a clean message, traceback only on debug."""
    import jconvert.application.use_cases as use_cases

    def _boom(*args: object, **kwargs: object) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(use_cases, "run", _boom)

    result = _convert("-i", str(sample_tree))
    assert result.exit_code == 1
    assert "RuntimeError" in result.output
    assert "Traceback" not in result.output

    debug = runner.invoke(cli_module.app, ["--debug", "convert", "-i", str(sample_tree)])
    assert debug.exit_code == 1
    assert "Traceback" in debug.output


def test_doctor_prints_environment() -> None:
    """Report library versions and the default worker count."""
    result = runner.invoke(cli_module.app, ["doctor"])
    assert result.exit_code == 0
    assert "Python:" in result.output
    assert "typer:" in result.output
    assert "default workers:" in result.output
