#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/jconvert"

PRESENTATION_IMPORTS = [
    "import typer",
    "from typer",
    "import rich",
    "from rich",
    "import tqdm",
    "from tqdm",
]


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main(package: Path = PACKAGE) -> None:
    """Run repository architecture boundary checks."""
    cli_path = package / "cli/cli.py"
    _assert_no_imports(
        cli_path,
        [
            "ThreadPoolExecutor",
            "import threading",
            "import mmap",
        ],
    )

    core_modules = [
        package / "pattern.py",
        package / "extract.py",
        package / "processor.py",
        package / "stats.py",
    ]
    layered = [
        *sorted((package / "application").glob("*.py")),
        *sorted((package / "adapters").glob("*.py")),
        *sorted((package / "infrastructure").glob("*.py")),
    ]
    for path in [*core_modules, *layered]:
        _assert_no_imports(path, PRESENTATION_IMPORTS)

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
