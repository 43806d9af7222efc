"""Plain-text error log writer."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from jconvert.application.results import FileFailure
from jconvert.errors import OutputWriteError


def render_error_log(failures: Sequence[FileFailure], generated_at: datetime) -> str:
    """Render the error report text."""
    lines = [
        "jconvert error log",
        f"Generated: {generated_at.isoformat()}",
        f"Total errors: {len(failures)}",
        "=" * 50,
    ]
    for failure in failures:
        lines.append("")
        lines.append(f"File: {failure.path}")
        lines.append(f"Error: {failure.reason}")
    return "\n".join(lines) + "\n"


def write_error_log(
    log_path: Path,
    failures: Sequence[FileFailure],
    *,
    generated_at: datetime | None = None,
) -> Path:
    """Write the error report to ``log_path``, replacing any previous log."""
    stamp = generated_at or datetime.now(timezone.utc)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        log_path.write_text(render_error_log(failures, stamp), encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(log_path, str(exc)) from exc
    return log_path
