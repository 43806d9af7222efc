"""Unit tests for JSONL output handling."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from jconvert.application.options import WriteMode
from jconvert.errors import OutputExistsError, OutputWriteError
from jconvert.infrastructure.output import JsonlWriter, check_write_mode, open_output


def test_overwrite_truncates(tmp_path: Path) -> None:
    """Replace existing content in overwrite mode."""
    out = tmp_path / "out.jsonl"
    out.write_text("old\n", encoding="utf-8")
    with JsonlWriter(out, WriteMode.OVERWRITE) as writer:
        writer.write_line('{"id":1}')
    assert out.read_text(encoding="utf-8") == '{"id":1}\n'


def test_append_keeps_existing_lines(tmp_path: Path) -> None:
    """Add records after existing content in append mode."""
    out = tmp_path / "out.jsonl"
    out.write_text('{"id":0}\n', encoding="utf-8")
    with JsonlWriter(out, WriteMode.APPEND) as writer:
        writer.write_line('{"id":1}')
    assert out.read_text(encoding="utf-8").splitlines() == ['{"id":0}', '{"id":1}']


def test_error_mode_refuses_existing_file(tmp_path: Path) -> None:
    """Fail fast without touching an existing destination."""
    out = tmp_path / "out.jsonl"
    out.write_text("keep\n", encoding="utf-8")

    with pytest.raises(OutputExistsError) as info:
        check_write_mode(out, WriteMode.ERROR)
    assert str(info.value) == f"Output file already exists: {out}"

    with pytest.raises(OutputExistsError):
        open_output(out, WriteMode.ERROR)
    assert out.read_text(encoding="utf-8") == "keep\n"


def test_error_mode_creates_missing_file(tmp_path: Path) -> None:
    """Create the destination when it does not exist yet."""
    out = tmp_path / "new" / "out.jsonl"
    check_write_mode(out, WriteMode.ERROR)
    with JsonlWriter(out, WriteMode.ERROR) as writer:
        writer.write_line("1")
    assert out.read_text(encoding="utf-8") == "1\n"


def test_write_line_reports_encoded_size(tmp_path: Path) -> None:
    """Count UTF-8 bytes plus the newline terminator."""
    with JsonlWriter(tmp_path / "out.jsonl", WriteMode.OVERWRITE) as writer:
        assert writer.write_line('{"a":1}') == 8
        assert writer.write_line('"é"') == 5
        assert writer.lines_written == 2
        assert writer.bytes_written == 13


def test_concurrent_writes_never_interleave(tmp_path: Path) -> None:
    """Keep each record on its own intact line under concurrency."""
    out = tmp_path / "out.jsonl"
    records = [f'{{"id":{i},"pad":"{"x" * 200}"}}' for i in range(400)]
    with JsonlWriter(out, WriteMode.OVERWRITE) as writer:
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(writer.write_line, records))

    lines = out.read_text(encoding="utf-8").splitlines()
    assert sorted(lines) == sorted(records)


def test_close_is_idempotent(tmp_path: Path) -> None:
    """Allow closing the writer more than once."""
    writer = JsonlWriter(tmp_path / "out.jsonl", WriteMode.OVERWRITE)
    writer.close()
    writer.close()


def test_unopenable_destination_raises(tmp_path: Path) -> None:
    """Report destinations that cannot be created."""
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(OutputWriteError):
        open_output(blocker / "out.jsonl", WriteMode.OVERWRITE)
