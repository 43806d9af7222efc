"""Per-file read, parse, transform and serialize unit of work."""

from __future__ import annotations

import json
import logging
import mmap
from pathlib import Path

from jconvert.application.options import ProcessOptions
from jconvert.application.results import Failed, ProcessResult, Serialized, Valid
from jconvert.errors import FileOpenError, FileProcessingError, ParseError, SerializeError
from jconvert.extract import extract_fields
from jconvert.types import JsonValue

logger = logging.getLogger(__name__)

_COMPACT_SEPARATORS = (",", ":")


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def _decode(data: bytes | mmap.mmap, path: Path) -> JsonValue:
    # Both I/O strategies funnel through here so results cannot diverge.
    try:
        text = str(data, "utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"invalid UTF-8: {exc}") from exc
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise ParseError(path, str(exc)) from exc
    except RecursionError as exc:
        raise ParseError(path, "nesting too deep") from exc
    except ValueError as exc:
        raise ParseError(path, str(exc)) from exc


def parse_with_reader(path: Path) -> JsonValue:
    """Parse ``path`` through a buffered binary stream."""
    try:
        handle = path.open("rb")
    except OSError as exc:
        raise FileOpenError(path, str(exc)) from exc
    with handle:
        try:
            data = handle.read()
        except OSError as exc:
            raise FileOpenError(path, str(exc)) from exc
    return _decode(data, path)


def parse_with_mmap(path: Path) -> JsonValue:
    """Parse ``path`` from a read-only memory map."""
    try:
        handle = path.open("rb")
    except OSError as exc:
        raise FileOpenError(path, str(exc)) from exc
    with handle:
        try:
            mapped = mmap.mmap(handle.fileno(), 0, access=mmap.ACCESS_READ)
        except (OSError, ValueError) as exc:
            raise FileOpenError(path, f"memory mapping failed: {exc}") from exc
        with mapped:
            return _decode(mapped, path)


def serialize(value: JsonValue, path: Path, *, pretty: bool = False) -> str:
    """Serialize ``value`` as strict JSON text."""
    try:
        if pretty:
            text = json.dumps(value, ensure_ascii=False, allow_nan=False, indent=2)
        else:
            text = json.dumps(
                value,
                ensure_ascii=False,
                allow_nan=False,
                separators=_COMPACT_SEPARATORS,
            )
        # Lone surrogate escapes survive json.loads but have no UTF-8 form.
        text.encode("utf-8")
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializeError(path, str(exc)) from exc
    return text


def _stat_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


def _uses_mmap(file_size: int, options: ProcessOptions) -> bool:
    # mmap cannot map zero-length files; those always go through the reader.
    return file_size > 0 and file_size >= options.mmap_threshold


def _process(path: Path, file_size: int, options: ProcessOptions) -> str | None:
    if _uses_mmap(file_size, options):
        value = parse_with_mmap(path)
    else:
        value = parse_with_reader(path)

    if options.validate_only:
        return None

    if options.fields is not None:
        value = extract_fields(value, options.fields)

    return serialize(value, path, pretty=options.pretty)


def process_file(path: Path, options: ProcessOptions) -> ProcessResult:
    """Process one JSON file into a :class:`ProcessResult`.

    Never raises: open, parse and serialize failures become a ``Failed``
    outcome whose reason is prefixed with the failure kind.

    Parameters
    ----------
    path : Path
        Source JSON file.
    options : ProcessOptions
        Shared, read-only processing options.

    Returns
    -------
    ProcessResult
        ``Serialized`` on conversion, ``Valid`` in validate-only mode,
        ``Failed`` otherwise.
    """
    file_size = _stat_size(path)
    try:
        line = _process(path, file_size, options)
    except FileProcessingError as exc:
        logger.debug("failed to process %s: %s", path, exc)
        return ProcessResult(path=path, outcome=Failed(str(exc)), file_size=file_size)
    except Exception as exc:  # pragma: no cover
        logger.exception("unexpected error while processing %s", path)
        return ProcessResult(
            path=path,
            outcome=Failed(f"unexpected error: {exc}"),
            file_size=file_size,
        )

    if line is None:
        return ProcessResult(path=path, outcome=Valid(), file_size=file_size)
    return ProcessResult(path=path, outcome=Serialized(line), file_size=file_size)


def validate_file(path: Path, *, mmap_threshold: int | None = None) -> ProcessResult:
    """Check that ``path`` holds syntactically valid JSON."""
    if mmap_threshold is None:
        options = ProcessOptions(validate_only=True)
    else:
        options = ProcessOptions(validate_only=True, mmap_threshold=mmap_threshold)
    return process_file(path, options)
