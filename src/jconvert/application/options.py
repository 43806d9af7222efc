"""Typed option objects shared across pipeline use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

DEFAULT_MMAP_THRESHOLD = 10 * 1024 * 1024
DEFAULT_OUTPUT_PATH = Path("output.jsonl")


class WriteMode(StrEnum):
    """Policy for an existing output destination."""

    OVERWRITE = "overwrite"
    APPEND = "append"
    ERROR = "error"


@dataclass(frozen=True)
class ProcessOptions:
    """Per-file processing configuration shared read-only by all workers."""

    fields: tuple[str, ...] | None = None
    pretty: bool = False
    validate_only: bool = False
    mmap_threshold: int = DEFAULT_MMAP_THRESHOLD


@dataclass(frozen=True)
class RunOptions:
    """Validated configuration bundle for one pipeline run."""

    input_dir: Path
    output_path: Path = DEFAULT_OUTPUT_PATH
    write_mode: WriteMode = WriteMode.OVERWRITE
    pattern: str | None = None
    fields: tuple[str, ...] | None = None
    workers: int | None = None
    max_depth: int | None = None
    error_log: Path | None = None
    pretty: bool = False
    verbose: bool = False
    dry_run: bool = False
    validate_only: bool = False
    mmap_threshold: int = DEFAULT_MMAP_THRESHOLD

    def process_options(self) -> ProcessOptions:
        """Derive the per-file options for this run's mode."""
        if self.validate_only:
            return ProcessOptions(
                validate_only=True, mmap_threshold=self.mmap_threshold
            )
        return ProcessOptions(
            fields=self.fields,
            pretty=self.pretty,
            mmap_threshold=self.mmap_threshold,
        )
