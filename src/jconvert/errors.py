"""Exception hierarchy for jconvert.

Configuration errors abort a run before any file is processed. Per-file
errors are captured by the file processor and never escape it.
"""

from __future__ import annotations

from pathlib import Path


class JConvertError(Exception):
    """Base class for all jconvert errors."""

    exit_code: int = 1


class ConfigurationError(JConvertError):
    """Fatal error detected before processing starts."""


class InvalidConfigError(ConfigurationError):
    """Run configuration failed validation."""

    exit_code = 2


class InputNotFoundError(ConfigurationError):
    """Input directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Input directory not found: {path}")


class InputNotADirectoryError(ConfigurationError):
    """Input path exists but is not a directory."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Input path is not a directory: {path}")


class OutputExistsError(ConfigurationError):
    """Output file exists and write mode forbids touching it."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Output file already exists: {path}")


class InvalidPatternError(ConfigurationError):
    """Filename glob pattern could not be compiled."""

    exit_code = 2

    def __init__(self, pattern: str, reason: str | None = None) -> None:
        self.pattern = pattern
        self.reason = reason
        message = f"Invalid pattern: {pattern}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class WorkerPoolError(ConfigurationError):
    """Worker pool could not be constructed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to start worker pool: {reason}")


class OutputWriteError(JConvertError):
    """Output destination could not be opened or written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write {path}: {reason}")


class FileProcessingError(JConvertError):
    """Per-file failure; rendered into a ``Failed`` outcome."""

    kind = "processing error"

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{self.kind}: {reason}")


class FileOpenError(FileProcessingError):
    """Source file could not be opened or memory-mapped."""

    kind = "file open error"


class ParseError(FileProcessingError):
    """Source file is not valid JSON."""

    kind = "parse error"


class SerializeError(FileProcessingError):
    """Parsed value could not be serialized back to JSON."""

    kind = "serialize error"
