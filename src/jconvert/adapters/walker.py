"""Filesystem directory walker."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path


class FilesystemWalker:
    """Depth-limited walk over regular files.

    Depth 0 is ``root`` itself and files directly inside it sit at depth 1,
    so ``max_depth=1`` lists only top-level files. Unreadable directories are
    skipped and symlinked directories are not followed. Names are visited in
    sorted order so discovery is deterministic.
    """

    def walk(self, root: Path, max_depth: int | None = None) -> Iterator[Path]:
        """Yield regular files under ``root`` up to ``max_depth``."""
        if max_depth is not None and max_depth < 1:
            return
        root_depth = len(root.parts)
        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            depth = len(current.parts) - root_depth + 1
            dirnames.sort()
            if max_depth is not None and depth >= max_depth:
                # Files here are at ``depth``; nothing deeper is wanted.
                dirnames.clear()
            for name in sorted(filenames):
                candidate = current / name
                if candidate.is_file():
                    yield candidate


def is_json_file(path: Path) -> bool:
    """Whether ``path`` has a case-insensitive ``.json`` extension."""
    return path.suffix.lower() == ".json"
