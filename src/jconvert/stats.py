"""Run statistics and human-readable formatting helpers."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

_KB = 1024
_MB = _KB * 1024
_GB = _MB * 1024

_RULE = "=" * 50


def format_bytes(size: int) -> str:
    """Format a byte count.

    Examples
    --------
    >>> format_bytes(500)
    '500 B'
    >>> format_bytes(1536)
    '1.50 KB'
    >>> format_bytes(1048576)
    '1.00 MB'
    """
    if size >= _GB:
        return f"{size / _GB:.2f} GB"
    if size >= _MB:
        return f"{size / _MB:.2f} MB"
    if size >= _KB:
        return f"{size / _KB:.2f} KB"
    return f"{size} B"


def format_duration(seconds: float) -> str:
    """Format an elapsed duration.

    Examples
    --------
    >>> format_duration(0.5)
    '500ms'
    >>> format_duration(65)
    '1m 5s'
    """
    whole = int(seconds)
    millis = int(round((seconds - whole) * 1000))
    if millis == 1000:
        whole, millis = whole + 1, 0
    if whole >= 3600:
        return f"{whole // 3600}h {(whole % 3600) // 60}m"
    if whole >= 60:
        return f"{whole // 60}m {whole % 60}s"
    if whole > 0:
        return f"{whole}.{millis:03d}s"
    return f"{millis}ms"


@dataclass(frozen=True)
class StatisticsSnapshot:
    """Point-in-time copy of all counters."""

    total_files: int
    success_count: int
    error_count: int
    validation_failed_count: int
    bytes_read: int
    bytes_written: int
    elapsed: float


class Statistics:
    """Thread-safe run counters.

    Every mutation holds an internal lock, so concurrent increments from
    worker threads are never lost. Counters are independent; no
    cross-counter atomicity is provided.

    Parameters
    ----------
    total_files : int
        Number of files discovered for the run.
    clock : Callable[[], float], default=time.monotonic
        Clock used for elapsed time.
    """

    def __init__(
        self, total_files: int, *, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self._total_files = total_files
        self._clock = clock
        self._start_time = clock()
        self._lock = threading.Lock()
        self._success = 0
        self._errors = 0
        self._validation_failed = 0
        self._bytes_read = 0
        self._bytes_written = 0

    def increment_success(self) -> None:
        with self._lock:
            self._success += 1

    def increment_error(self) -> None:
        with self._lock:
            self._errors += 1

    def increment_validation_failed(self) -> None:
        with self._lock:
            self._validation_failed += 1

    def add_bytes_read(self, count: int) -> None:
        with self._lock:
            self._bytes_read += count

    def add_bytes_written(self, count: int) -> None:
        with self._lock:
            self._bytes_written += count

    @property
    def total_files(self) -> int:
        return self._total_files

    @property
    def start_time(self) -> float:
        return self._start_time

    @property
    def success_count(self) -> int:
        with self._lock:
            return self._success

    @property
    def error_count(self) -> int:
        with self._lock:
            return self._errors

    @property
    def validation_failed_count(self) -> int:
        with self._lock:
            return self._validation_failed

    @property
    def bytes_read(self) -> int:
        with self._lock:
            return self._bytes_read

    @property
    def bytes_written(self) -> int:
        with self._lock:
            return self._bytes_written

    @property
    def processed_count(self) -> int:
        """Files with a recorded outcome so far."""
        with self._lock:
            return self._success + self._errors + self._validation_failed

    @property
    def success_rate(self) -> float:
        """Fraction of files that succeeded, ``0.0`` for an empty run."""
        if self._total_files == 0:
            return 0.0
        return self.success_count / self._total_files

    @property
    def elapsed(self) -> float:
        """Seconds since the statistics were created."""
        return max(0.0, self._clock() - self._start_time)

    def snapshot(self) -> StatisticsSnapshot:
        """Return a consistent copy of all counters."""
        elapsed = self.elapsed
        with self._lock:
            return StatisticsSnapshot(
                total_files=self._total_files,
                success_count=self._success,
                error_count=self._errors,
                validation_failed_count=self._validation_failed,
                bytes_read=self._bytes_read,
                bytes_written=self._bytes_written,
                elapsed=elapsed,
            )

    def render_summary(self) -> str:
        """Render the conversion summary block."""
        snap = self.snapshot()
        lines = [
            _RULE,
            " Conversion summary",
            _RULE,
            f"  Total files:   {snap.total_files}",
            f"  Succeeded:     {snap.success_count}",
            f"  Failed:        {snap.error_count}",
            f"  Input size:    {format_bytes(snap.bytes_read)}",
            f"  Output size:   {format_bytes(snap.bytes_written)}",
        ]
        if snap.total_files > 0:
            rate = snap.success_count / snap.total_files * 100
            lines.append(f"  Success rate:  {rate:.1f}%")
        lines.append(f"  Elapsed:       {snap.elapsed:.2f}s")
        lines.append(_RULE)
        return "\n".join(lines)

    def render_validation_summary(self) -> str:
        """Render the validation summary block."""
        snap = self.snapshot()
        lines = [
            _RULE,
            " Validation summary",
            _RULE,
            f"  Total files:   {snap.total_files}",
            f"  Valid:         {snap.success_count}",
            f"  Invalid:       {snap.validation_failed_count}",
        ]
        if snap.total_files > 0:
            rate = snap.success_count / snap.total_files * 100
            lines.append(f"  Valid rate:    {rate:.1f}%")
        lines.append(f"  Elapsed:       {snap.elapsed:.2f}s")
        lines.append(_RULE)
        return "\n".join(lines)

    def __repr__(self) -> str:
        snap = self.snapshot()
        return (
            f"Statistics(total={snap.total_files}, success={snap.success_count}, "
            f"errors={snap.error_count}, invalid={snap.validation_failed_count})"
        )
