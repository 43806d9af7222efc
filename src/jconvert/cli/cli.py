#!/usr/bin/env python3
"""
jconvert.cli.cli

Typer-based CLI for merging a folder of JSON documents into one JSONL file.

Examples
--------
Convert a folder:

    jconvert convert -i ./data -o result.jsonl

Append to an existing file, keeping only some fields:

    jconvert convert -i ./data -o result.jsonl --mode append --fields "id,user.name"

Preview or validate without writing:

    jconvert convert -i ./data --dry-run
    jconvert convert -i ./data --validate-only --log errors.log
"""

from __future__ import annotations

import logging
import sys
import traceback
from collections.abc import Sequence
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from tqdm import tqdm

from jconvert.application.options import DEFAULT_MMAP_THRESHOLD, RunOptions, WriteMode
from jconvert.application.results import FileFailure, ProcessResult, RunReport
from jconvert.errors import JConvertError

app = typer.Typer(
    name="jconvert",
    help="Merge a folder of JSON files into a single JSONL file.",
    no_args_is_help=True,
)

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

RULE = "═" * 50


# -----------------------------
# Logging / error output
# -----------------------------
def _setup_logging(verbose: bool, debug: bool) -> None:
    """Attach a rich console handler to the package logger."""
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logger = logging.getLogger("jconvert")
    logger.setLevel(level)
    logger.handlers.clear()
    handler = RichHandler(
        console=Console(stderr=True), show_time=False, show_path=False
    )
    handler.setLevel(level)
    logger.addHandler(handler)


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly fatal error.

    Parameters
    ----------
    exc : Exception
        Exception that aborted the run.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    err_console.print(f"[red]✗ {type(exc).__name__}:[/red] {escape(str(exc))}")
    if debug:
        err_console.print("\n[dim]Traceback:[/dim]")
        err_console.print(
            escape("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
        )
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


# -----------------------------
# Report rendering
# -----------------------------
def _print_header(options: RunOptions) -> None:
    console.print(f"\n[bright_blue]{RULE}[/bright_blue]")
    console.print("[bold] JSON FOLDER TO JSONL CONVERTER[/bold]")
    console.print(f"[bright_blue]{RULE}[/bright_blue]")
    console.print(f"  Input folder:  {escape(str(options.input_dir))}")
    if not options.validate_only:
        console.print(f"  Output file:   {escape(str(options.output_path))}")
        console.print(f"  Write mode:    {options.write_mode.value}")
    if options.pattern:
        console.print(f"  Pattern:       {escape(options.pattern)}")
    if options.fields is not None:
        console.print(f"  Fields:        {escape(', '.join(options.fields))}")
    if options.max_depth is not None:
        console.print(f"  Max depth:     {options.max_depth}")
    if options.dry_run:
        console.print("  [yellow]Dry run (nothing will be written)[/yellow]")
    if options.validate_only:
        console.print("  [cyan]Validate-only mode[/cyan]")
    if options.pretty:
        console.print("  [magenta]Pretty output[/magenta]")
    console.print(f"[bright_blue]{RULE}[/bright_blue]")


def _print_dry_run(files: Sequence[Path]) -> None:
    console.print("\n[cyan]Files to process:[/cyan]")
    for index, path in enumerate(files, start=1):
        console.print(f"  {index}. {escape(path.name)}")
    console.print(f"\n{len(files)} files would be processed.")


def _print_failures(failures: Sequence[FileFailure], verbose: bool) -> None:
    if not failures:
        return
    console.print("\n[bright_red]Failed files:[/bright_red]")
    for failure in failures:
        console.print(f"  [red]•[/red] {escape(failure.path.name)}")
        if verbose:
            console.print(f"    [dim]{escape(failure.reason)}[/dim]")


class _ProgressReporter:
    """Drive a tqdm bar from discovery and per-file results."""

    def __init__(self, verbose: bool, show_bar: bool) -> None:
        self._verbose = verbose
        self._show_bar = show_bar
        self._bar: tqdm | None = None

    def on_discovered(self, files: Sequence[Path]) -> None:
        if not files:
            return
        console.print(f"  Files found:   [green]{len(files)}[/green]")
        if self._show_bar:
            self._bar = tqdm(total=len(files), unit="file", file=sys.stderr)

    def __call__(self, result: ProcessResult) -> None:
        if self._bar is None:
            return
        self._bar.update(1)
        if self._verbose and result.is_valid:
            self._bar.write(f"  ✓ {result.path.name}")

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None


def _print_report(report: RunReport, options: RunOptions) -> None:
    if report.mode == "empty":
        console.print("[yellow]⚠ No JSON files found.[/yellow]")
        return
    if report.mode == "dry_run":
        _print_dry_run(report.files)
        return

    _print_failures(report.failures, options.verbose)
    if report.error_log_path is not None:
        console.print(f"\nError log written: {escape(str(report.error_log_path))}")

    stats = report.statistics
    if stats is None:
        return
    if report.mode == "validate":
        console.print(f"\n{stats.render_validation_summary()}")
        invalid = stats.validation_failed_count
        if invalid == 0:
            console.print("\n[green]✓ All files are valid.[/green]")
        else:
            console.print(f"\n[yellow]⚠ {invalid} files invalid.[/yellow]")
        return

    console.print(f"\n{stats.render_summary()}")
    if stats.error_count:
        console.print(f"\n[yellow]⚠ {stats.error_count} files failed.[/yellow]")
    console.print(f"\n[green]✓ Saved:[/green] {escape(str(report.output_path))}")


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    """
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    input_dir: Path = typer.Option(
        ..., "--input", "-i", help="Folder containing the JSON files."
    ),
    output_path: Path = typer.Option(
        Path("output.jsonl"), "--output", "-o", help="JSONL file to create."
    ),
    mode: WriteMode = typer.Option(
        WriteMode.OVERWRITE,
        "--mode",
        "-m",
        case_sensitive=False,
        help="What to do when the output file already exists.",
    ),
    pattern: str | None = typer.Option(
        None,
        "--pattern",
        "-p",
        help='Filename glob filter, e.g. "*_SUM_*" or "data?.json".',
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output."),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="List the files that would be processed and exit."
    ),
    validate_only: bool = typer.Option(
        False, "--validate-only", help="Only check that every file is valid JSON."
    ),
    fields: str | None = typer.Option(
        None,
        "--fields",
        help='Comma-separated fields to keep, e.g. "id,name,user.profile.age".',
    ),
    threads: int | None = typer.Option(
        None, "--threads", "-j", help="Worker threads (default: CPU count)."
    ),
    max_depth: int | None = typer.Option(
        None, "--max-depth", help="Maximum folder depth to search."
    ),
    log: Path | None = typer.Option(None, "--log", help="Write an error log file."),
    pretty: bool = typer.Option(False, "--pretty", help="Indent output records."),
    mmap_threshold: int = typer.Option(
        DEFAULT_MMAP_THRESHOLD,
        "--mmap-threshold",
        help="File size in bytes from which files are memory-mapped.",
    ),
) -> None:
    """Convert every JSON file under a folder into one JSONL file.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    input_dir : Path
        Root folder searched for ``.json`` files.
    output_path : Path
        Destination JSONL file.
    mode : WriteMode
        ``overwrite``, ``append`` or ``error`` for an existing destination.

    Notes
    -----
    - Per-file failures are reported but do not change the exit code.
    - Configuration errors (missing folder, bad pattern, existing output in
      ``error`` mode) abort before any file is read.
    """
    debug: bool = bool(ctx.obj.get("debug", False))
    _setup_logging(verbose, debug)

    try:
        from jconvert.application.use_cases import build_run_options, run

        options = build_run_options(
            input_dir=input_dir,
            output_path=output_path,
            write_mode=mode,
            pattern=pattern,
            fields=fields,
            workers=threads,
            max_depth=max_depth,
            error_log=log,
            pretty=pretty,
            verbose=verbose,
            dry_run=dry_run,
            validate_only=validate_only,
            mmap_threshold=mmap_threshold,
        )
        _print_header(options)

        progress = _ProgressReporter(verbose, show_bar=not options.dry_run)
        try:
            report = run(
                options, observer=progress, on_discovered=progress.on_discovered
            )
        finally:
            progress.close()
        _print_report(report, options)
    except JConvertError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_error(exc, debug))


@app.command("doctor")
def doctor_cmd() -> None:
    """Print installed library versions and the default worker count."""
    import importlib.metadata as metadata

    from jconvert.application.use_cases import default_worker_count

    modules = ["jconvert", "typer", "pydantic", "rich", "tqdm"]

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in modules:
        try:
            version = metadata.version(module)
            typer.echo(f"{module}: {version}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")
    typer.echo(f"default workers: {default_worker_count()}")


if __name__ == "__main__":
    app()
