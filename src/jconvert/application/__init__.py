"""Application-layer use-cases and option objects."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from jconvert.application.options import ProcessOptions, RunOptions, WriteMode
from jconvert.application.ports import FileWalker, ResultObserver
from jconvert.application.results import (
    Failed,
    FileFailure,
    ProcessResult,
    RunReport,
    Serialized,
    Valid,
)


def build_run_options(**params: object) -> RunOptions:
    """Build typed run options via lazy use-case import."""
    from jconvert.application.use_cases import build_run_options as _impl

    return _impl(**params)


def run(
    options: RunOptions,
    *,
    observer: ResultObserver | None = None,
    walker: FileWalker | None = None,
    on_discovered: Callable[[Sequence[Path]], None] | None = None,
) -> RunReport:
    """Run the pipeline via lazy use-case import."""
    from jconvert.application.use_cases import run as _impl

    return _impl(
        options, observer=observer, walker=walker, on_discovered=on_discovered
    )


def convert_files(
    files: Sequence[Path],
    *,
    output_path: Path,
    write_mode: WriteMode = WriteMode.OVERWRITE,
    options: ProcessOptions | None = None,
    workers: int | None = None,
    error_log: Path | None = None,
    observer: ResultObserver | None = None,
) -> RunReport:
    """Convert an explicit file list via lazy use-case import."""
    from jconvert.application.use_cases import convert_files as _impl

    return _impl(
        files,
        output_path=output_path,
        write_mode=write_mode,
        options=options,
        workers=workers,
        error_log=error_log,
        observer=observer,
    )


def validate_files(
    files: Sequence[Path],
    *,
    workers: int | None = None,
    mmap_threshold: int | None = None,
    error_log: Path | None = None,
    observer: ResultObserver | None = None,
) -> RunReport:
    """Validate an explicit file list via lazy use-case import."""
    from jconvert.application.use_cases import validate_files as _impl

    return _impl(
        files,
        workers=workers,
        mmap_threshold=mmap_threshold,
        error_log=error_log,
        observer=observer,
    )


__all__ = [
    "Failed",
    "FileFailure",
    "FileWalker",
    "ProcessOptions",
    "ProcessResult",
    "ResultObserver",
    "RunOptions",
    "RunReport",
    "Serialized",
    "Valid",
    "WriteMode",
    "build_run_options",
    "convert_files",
    "run",
    "validate_files",
]
