"""Public directory-based API (delegates to application use-cases)."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from jconvert.application.options import DEFAULT_MMAP_THRESHOLD
from jconvert.application.results import RunReport
from jconvert.application.use_cases import build_run_options
from jconvert.application.use_cases import run


def convert_directory_to_jsonl(
    input_dir: Path,
    output_path: Path,
    write_mode: str = "overwrite",
    pattern: Optional[str] = None,
    fields: Optional[str | Sequence[str]] = None,
    workers: Optional[int] = None,
    max_depth: Optional[int] = None,
    error_log: Optional[Path] = None,
    pretty: bool = False,
    mmap_threshold: int = DEFAULT_MMAP_THRESHOLD,
) -> RunReport:
    """Merge every JSON file under ``input_dir`` into one JSONL file."""
    options = build_run_options(
        input_dir=input_dir,
        output_path=output_path,
        write_mode=write_mode,
        pattern=pattern,
        fields=fields,
        workers=workers,
        max_depth=max_depth,
        error_log=error_log,
        pretty=pretty,
        mmap_threshold=mmap_threshold,
    )
    return run(options)


def validate_directory(
    input_dir: Path,
    pattern: Optional[str] = None,
    workers: Optional[int] = None,
    max_depth: Optional[int] = None,
    error_log: Optional[Path] = None,
    mmap_threshold: int = DEFAULT_MMAP_THRESHOLD,
) -> RunReport:
    """Check every JSON file under ``input_dir`` for syntactic validity."""
    options = build_run_options(
        input_dir=input_dir,
        pattern=pattern,
        workers=workers,
        max_depth=max_depth,
        error_log=error_log,
        validate_only=True,
        mmap_threshold=mmap_threshold,
    )
    return run(options)


def list_json_files(
    input_dir: Path,
    pattern: Optional[str] = None,
    max_depth: Optional[int] = None,
) -> list[Path]:
    """Return the files a run would process, without reading them."""
    options = build_run_options(
        input_dir=input_dir,
        pattern=pattern,
        max_depth=max_depth,
        dry_run=True,
    )
    return list(run(options).files)
