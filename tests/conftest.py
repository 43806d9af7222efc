"""Shared pytest configuration, marker assignment and file builders."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

import pytest

JsonFileFactory: TypeAlias = Callable[..., Path]


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def write_json(tmp_path: Path) -> JsonFileFactory:
    """Return a helper writing raw JSON text below ``tmp_path``."""

    def _write(name: str, content: str, *, root: Path | None = None) -> Path:
        path = (root or tmp_path) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_tree(tmp_path: Path, write_json: JsonFileFactory) -> Path:
    """Directory with flat, summary, nested and array documents."""
    root = tmp_path / "data"
    write_json("valid1.json", '{"id": 1, "name": "First"}', root=root)
    write_json("valid2.json", '{"id": 2, "name": "Second"}', root=root)
    write_json("data_SUM_1.json", '{"id": 3, "type": "summary", "value": 100}', root=root)
    write_json("data_SUM_2.json", '{"id": 4, "type": "summary", "value": 200}', root=root)
    write_json(
        "nested.json",
        '{"user": {"name": "John", "profile": {"age": 30, "city": "Seoul"}}}',
        root=root,
    )
    write_json("array.json", '[{"id": 1}, {"id": 2}, {"id": 3}]', root=root)
    return root


@pytest.fixture
def mixed_tree(tmp_path: Path, write_json: JsonFileFactory) -> Path:
    """Directory with one valid, one malformed and one empty document."""
    root = tmp_path / "mixed"
    write_json("valid.json", '{"id": 1}', root=root)
    write_json("invalid.json", '{"id": 1, broken', root=root)
    write_json("empty.json", "", root=root)
    return root


@pytest.fixture
def nested_tree(tmp_path: Path, write_json: JsonFileFactory) -> Path:
    """Directory with one JSON file per depth level, 1 through 4."""
    root = tmp_path / "nested"
    write_json("root.json", '{"level": 0}', root=root)
    write_json("level1/file1.json", '{"level": 1}', root=root)
    write_json("level1/level2/file2.json", '{"level": 2}', root=root)
    write_json("level1/level2/level3/file3.json", '{"level": 3}', root=root)
    return root
