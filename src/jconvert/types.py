"""Shared type aliases for jconvert modules."""

from __future__ import annotations

from typing import Literal, TypeAlias

WriteModeName: TypeAlias = Literal["overwrite", "append", "error"]
RunMode: TypeAlias = Literal["empty", "dry_run", "validate", "convert"]

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
