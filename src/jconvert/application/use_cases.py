"""Application use-cases orchestrating directory-to-JSONL runs."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from pathlib import Path
from typing import TypeAlias

from pydantic import ValidationError

from jconvert.adapters.walker import FilesystemWalker, is_json_file
from jconvert.application.options import ProcessOptions, RunOptions, WriteMode
from jconvert.application.ports import FileWalker, ResultObserver
from jconvert.application.results import (
    FileFailure,
    ProcessResult,
    RunReport,
    Serialized,
)
from jconvert.errors import (
    InputNotADirectoryError,
    InputNotFoundError,
    InvalidConfigError,
    WorkerPoolError,
)
from jconvert.infrastructure.error_log import write_error_log
from jconvert.infrastructure.output import JsonlWriter, check_write_mode
from jconvert.pattern import PatternMatcher
from jconvert.processor import process_file
from jconvert.schemas import RunConfig
from jconvert.stats import Statistics

logger = logging.getLogger(__name__)

Processor: TypeAlias = Callable[[Path, ProcessOptions], ProcessResult]


def default_worker_count() -> int:
    """Return the number of CPUs available to this process."""
    try:
        return len(os.sched_getaffinity(0)) or 1
    except AttributeError:
        return os.cpu_count() or 1


@contextmanager
def _worker_pool(workers: int | None) -> Iterator[ThreadPoolExecutor]:
    size = workers if workers is not None else default_worker_count()
    try:
        pool = ThreadPoolExecutor(max_workers=size, thread_name_prefix="jconvert")
    except (ValueError, RuntimeError) as exc:
        raise WorkerPoolError(str(exc)) from exc
    with pool:
        yield pool


def _map_files(
    pool: ThreadPoolExecutor,
    task: Callable[[Path], ProcessResult],
    files: Sequence[Path],
) -> Iterator[ProcessResult]:
    # Worker threads start on submit, so thread exhaustion surfaces here.
    try:
        return pool.map(task, files)
    except RuntimeError as exc:
        raise WorkerPoolError(str(exc)) from exc


def build_run_options(**params: object) -> RunOptions:
    """Build typed run options from command/API params.

    Raises
    ------
    InvalidConfigError
        If the parameters fail schema validation.
    """
    try:
        config = RunConfig.model_validate(params)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid run configuration: {exc}") from exc
    return RunOptions(**config.model_dump())


def validate_input_dir(input_dir: Path) -> None:
    """Ensure the input root exists and is a directory."""
    if not input_dir.exists():
        raise InputNotFoundError(input_dir)
    if not input_dir.is_dir():
        raise InputNotADirectoryError(input_dir)


def discover_json_files(
    input_dir: Path,
    matcher: PatternMatcher,
    max_depth: int | None = None,
    walker: FileWalker | None = None,
) -> list[Path]:
    """Collect ``.json`` files whose filename passes ``matcher``."""
    walker = walker or FilesystemWalker()
    return [
        path
        for path in walker.walk(input_dir, max_depth)
        if is_json_file(path) and matcher.matches(path.name)
    ]


def validate_files(
    files: Sequence[Path],
    *,
    workers: int | None = None,
    mmap_threshold: int | None = None,
    error_log: Path | None = None,
    observer: ResultObserver | None = None,
    processor: Processor = process_file,
) -> RunReport:
    """Use-case: parse every file and report validity.

    Workers fold their own outcomes into the shared statistics as they
    finish. Failures are listed in discovery order.
    """
    if mmap_threshold is None:
        options = ProcessOptions(validate_only=True)
    else:
        options = ProcessOptions(validate_only=True, mmap_threshold=mmap_threshold)
    stats = Statistics(len(files))
    failures: list[FileFailure] = []

    def _task(path: Path) -> ProcessResult:
        result = processor(path, options)
        if result.is_failure:
            stats.increment_validation_failed()
        else:
            stats.increment_success()
            stats.add_bytes_read(result.file_size)
        return result

    logger.info("validating %d files", len(files))
    with _worker_pool(workers) as pool:
        for result in _map_files(pool, _task, files):
            if result.is_failure:
                failures.append(FileFailure(path=result.path, reason=result.error or ""))
            if observer is not None:
                observer(result)

    log_path = _write_log(error_log, failures)
    return RunReport(
        mode="validate",
        files=tuple(files),
        statistics=stats,
        failures=tuple(failures),
        error_log_path=log_path,
    )


def convert_files(
    files: Sequence[Path],
    *,
    output_path: Path,
    write_mode: WriteMode = WriteMode.OVERWRITE,
    options: ProcessOptions | None = None,
    workers: int | None = None,
    error_log: Path | None = None,
    observer: ResultObserver | None = None,
    processor: Processor = process_file,
) -> RunReport:
    """Use-case: convert files in parallel and merge them into one JSONL file.

    The write-mode check happens before any file is processed. Results are
    written by this thread in discovery order through a single writer.
    """
    options = options or ProcessOptions()
    check_write_mode(output_path, write_mode)

    stats = Statistics(len(files))
    failures: list[FileFailure] = []

    logger.info("converting %d files into %s (%s)", len(files), output_path, write_mode)
    with _worker_pool(workers) as pool, JsonlWriter(output_path, write_mode) as writer:
        for result in _map_files(pool, lambda path: processor(path, options), files):
            if isinstance(result.outcome, Serialized):
                written = writer.write_line(result.outcome.line)
                stats.add_bytes_read(result.file_size)
                stats.add_bytes_written(written)
                stats.increment_success()
            else:
                stats.increment_error()
                failures.append(FileFailure(path=result.path, reason=result.error or ""))
            if observer is not None:
                observer(result)

    log_path = _write_log(error_log, failures)
    return RunReport(
        mode="convert",
        files=tuple(files),
        statistics=stats,
        failures=tuple(failures),
        output_path=output_path,
        error_log_path=log_path,
    )


def _write_log(error_log: Path | None, failures: Sequence[FileFailure]) -> Path | None:
    if error_log is None:
        return None
    path = write_error_log(error_log, failures)
    logger.info("wrote error log with %d entries to %s", len(failures), path)
    return path


def run(
    options: RunOptions,
    *,
    observer: ResultObserver | None = None,
    walker: FileWalker | None = None,
    on_discovered: Callable[[Sequence[Path]], None] | None = None,
) -> RunReport:
    """Use-case: run the full pipeline for one configuration.

    Configuration errors (missing input, bad pattern, existing output in
    ``error`` mode, pool failure) raise before any file is processed.
    Per-file failures are reported, never raised.
    """
    validate_input_dir(options.input_dir)
    matcher = PatternMatcher(options.pattern)
    files = discover_json_files(
        options.input_dir, matcher, max_depth=options.max_depth, walker=walker
    )
    logger.info("discovered %d JSON files under %s", len(files), options.input_dir)
    if on_discovered is not None:
        on_discovered(files)

    if not files:
        return RunReport(mode="empty")
    if options.dry_run:
        return RunReport(mode="dry_run", files=tuple(files))
    if options.validate_only:
        return validate_files(
            files,
            workers=options.workers,
            mmap_threshold=options.mmap_threshold,
            error_log=options.error_log,
            observer=observer,
        )
    return convert_files(
        files,
        output_path=options.output_path,
        write_mode=options.write_mode,
        options=options.process_options(),
        workers=options.workers,
        error_log=options.error_log,
        observer=observer,
    )
