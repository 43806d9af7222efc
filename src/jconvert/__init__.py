"""Top-level API for merging folders of JSON documents into JSONL."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from jconvert.application.options import DEFAULT_MMAP_THRESHOLD
from jconvert.application.results import RunReport
from jconvert.types import JsonValue

__version__ = "0.1.0"


def convert_directory_to_jsonl(
    input_dir: Path,
    output_path: Path,
    *,
    write_mode: str = "overwrite",
    pattern: str | None = None,
    fields: str | Sequence[str] | None = None,
    workers: int | None = None,
    max_depth: int | None = None,
    error_log: Path | None = None,
    pretty: bool = False,
    mmap_threshold: int = DEFAULT_MMAP_THRESHOLD,
) -> RunReport:
    """Merge every JSON file under a directory into one JSONL file.

    Parameters
    ----------
    input_dir : Path
        Root directory to search for ``.json`` files.
    output_path : Path
        Destination JSONL file.
    write_mode : {"overwrite", "append", "error"}, default="overwrite"
        Policy for an existing destination.
    pattern : str, optional
        Glob filter applied to file names, e.g. ``"*_SUM_*"``.
    fields : str or sequence of str, optional
        Field selectors; dotted paths are flattened to ``a_b`` keys.
    workers : int, optional
        Worker pool size. Defaults to the available CPUs.
    max_depth : int, optional
        Maximum directory depth (files directly in ``input_dir`` are depth 1).
    error_log : Path, optional
        Where to write the per-file error report.
    pretty : bool, default=False
        Indent output records.
    mmap_threshold : int, default=10 MiB
        File size in bytes from which files are memory-mapped.

    Returns
    -------
    RunReport
        Files, statistics and failures of the run.
    """
    from .api import convert_directory_to_jsonl as _impl

    return _impl(
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


def validate_directory(
    input_dir: Path,
    *,
    pattern: str | None = None,
    workers: int | None = None,
    max_depth: int | None = None,
    error_log: Path | None = None,
    mmap_threshold: int = DEFAULT_MMAP_THRESHOLD,
) -> RunReport:
    """Check every JSON file under a directory for syntactic validity.

    Returns
    -------
    RunReport
        Report whose statistics count valid and invalid files.
    """
    from .api import validate_directory as _impl

    return _impl(
        input_dir=input_dir,
        pattern=pattern,
        workers=workers,
        max_depth=max_depth,
        error_log=error_log,
        mmap_threshold=mmap_threshold,
    )


def extract_fields(value: JsonValue, selectors: Sequence[str]) -> JsonValue:
    """Reduce a parsed JSON value to the selected, flattened fields."""
    from .extract import extract_fields as _impl

    return _impl(value, selectors)


__all__ = [
    "__version__",
    "convert_directory_to_jsonl",
    "extract_fields",
    "validate_directory",
]
