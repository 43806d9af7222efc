"""Application-layer result objects."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, TypeAlias

from jconvert.types import RunMode

if TYPE_CHECKING:
    from jconvert.stats import Statistics


@dataclass(frozen=True)
class Serialized:
    """Successful conversion holding the serialized JSON text."""

    line: str


@dataclass(frozen=True)
class Valid:
    """Successful validate-only parse."""


@dataclass(frozen=True)
class Failed:
    """Per-file failure with a human-readable reason."""

    reason: str


Outcome: TypeAlias = Serialized | Valid | Failed


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of processing a single source file."""

    path: Path
    outcome: Outcome
    file_size: int = 0

    @property
    def line(self) -> str | None:
        """Serialized line, when conversion succeeded."""
        if isinstance(self.outcome, Serialized):
            return self.outcome.line
        return None

    @property
    def error(self) -> str | None:
        """Failure reason, when processing failed."""
        if isinstance(self.outcome, Failed):
            return self.outcome.reason
        return None

    @property
    def is_valid(self) -> bool:
        """Whether the file parsed successfully."""
        return not isinstance(self.outcome, Failed)

    @property
    def is_failure(self) -> bool:
        return isinstance(self.outcome, Failed)


@dataclass(frozen=True)
class FileFailure:
    """Failed file and the reason it failed."""

    path: Path
    reason: str


@dataclass(frozen=True)
class RunReport:
    """Structured outcome of one pipeline run."""

    mode: RunMode
    files: Sequence[Path] = ()
    statistics: Statistics | None = None
    failures: Sequence[FileFailure] = field(default_factory=tuple)
    output_path: Path | None = None
    error_log_path: Path | None = None

    @property
    def failed_count(self) -> int:
        return len(self.failures)
