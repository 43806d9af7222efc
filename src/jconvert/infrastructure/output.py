"""JSONL output destination handling."""

from __future__ import annotations

import threading
from pathlib import Path
from types import TracebackType
from typing import BinaryIO, Self

from jconvert.application.options import WriteMode
from jconvert.errors import OutputExistsError, OutputWriteError


def check_write_mode(output_path: Path, mode: WriteMode) -> None:
    """Fail fast when ``error`` mode meets an existing destination.

    Raises
    ------
    OutputExistsError
        If ``mode`` is ``error`` and ``output_path`` exists.
    """
    if mode is WriteMode.ERROR and output_path.exists():
        raise OutputExistsError(output_path)


def open_output(output_path: Path, mode: WriteMode) -> BinaryIO:
    """Open the destination according to ``mode``.

    ``append`` keeps existing content, ``overwrite`` truncates, and
    ``error`` creates the file exclusively.
    """
    flags = {
        WriteMode.OVERWRITE: "wb",
        WriteMode.APPEND: "ab",
        WriteMode.ERROR: "xb",
    }[mode]
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(output_path, str(exc)) from exc
    try:
        return output_path.open(flags)
    except FileExistsError as exc:
        raise OutputExistsError(output_path) from exc
    except OSError as exc:
        raise OutputWriteError(output_path, str(exc)) from exc


class JsonlWriter:
    """Single shared writer appending newline-terminated records.

    A lock serializes :meth:`write_line` so concurrent callers can never
    interleave partial records.
    """

    def __init__(self, output_path: Path, mode: WriteMode) -> None:
        self.output_path = output_path
        self._handle = open_output(output_path, mode)
        self._lock = threading.Lock()
        self.lines_written = 0
        self.bytes_written = 0

    def write_line(self, line: str) -> int:
        """Write ``line`` plus ``\\n`` and return the byte count written."""
        payload = line.encode("utf-8") + b"\n"
        with self._lock:
            try:
                self._handle.write(payload)
            except OSError as exc:
                raise OutputWriteError(self.output_path, str(exc)) from exc
            self.lines_written += 1
            self.bytes_written += len(payload)
        return len(payload)

    def close(self) -> None:
        with self._lock:
            if self._handle.closed:
                return
            try:
                self._handle.flush()
            except OSError as exc:
                raise OutputWriteError(self.output_path, str(exc)) from exc
            finally:
                self._handle.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
