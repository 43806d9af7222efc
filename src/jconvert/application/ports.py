"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from jconvert.application.results import ProcessResult


class FileWalker(Protocol):
    """Enumerate regular files below a root directory."""

    def walk(self, root: Path, max_depth: int | None = None) -> Iterable[Path]:
        """Yield file paths under ``root``."""


class ResultObserver(Protocol):
    """Receive each per-file result as the orchestrator folds it."""

    def __call__(self, result: ProcessResult) -> None:
        """Handle one processed file."""
