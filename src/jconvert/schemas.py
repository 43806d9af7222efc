"""Pydantic schemas for runtime validation of run configuration."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jconvert.application.options import (
    DEFAULT_MMAP_THRESHOLD,
    DEFAULT_OUTPUT_PATH,
    WriteMode,
)
from jconvert.extract import parse_field_selectors


class RunConfig(BaseModel):
    """Validated input for a directory-to-JSONL run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    input_dir: Path
    output_path: Path = DEFAULT_OUTPUT_PATH
    write_mode: WriteMode = WriteMode.OVERWRITE
    pattern: str | None = None
    fields: tuple[str, ...] | None = None
    workers: int | None = Field(default=None, ge=1)
    max_depth: int | None = Field(default=None, ge=0)
    error_log: Path | None = None
    pretty: bool = False
    verbose: bool = False
    dry_run: bool = False
    validate_only: bool = False
    mmap_threshold: int = Field(default=DEFAULT_MMAP_THRESHOLD, ge=0)

    @field_validator("fields", mode="before")
    @classmethod
    def _split_fields(
        cls, value: str | Sequence[str] | None
    ) -> tuple[str, ...] | None:
        if value is None:
            return None
        if isinstance(value, str):
            return parse_field_selectors(value)
        return tuple(item.strip() for item in value if item and item.strip())

    @field_validator("pattern")
    @classmethod
    def _validate_pattern(cls, value: str | None) -> str | None:
        if value is not None and not value:
            raise ValueError("pattern cannot be empty.")
        return value
