"""Field selection and flattening for parsed JSON values."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from jconvert.types import JsonValue


class _Missing:
    """Sentinel type for unresolved selector paths."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


def flattened_key(selector: str) -> str:
    """Return the output key for ``selector`` (``a.b`` becomes ``a_b``)."""
    return selector.replace(".", "_")


def _array_index(segment: str) -> int | None:
    if not segment or not segment.isascii() or not segment.isdigit():
        return None
    return int(segment)


def resolve_path(value: JsonValue, path: str) -> JsonValue | _Missing:
    """Walk a dotted selector path through ``value``.

    Objects are indexed by key and arrays by non-negative integer segment.
    Any other combination ends the walk.

    Parameters
    ----------
    value : JsonValue
        Parsed JSON value to traverse.
    path : str
        Dot-separated selector, e.g. ``"user.profile.age"`` or ``"items.0.id"``.

    Returns
    -------
    JsonValue | MISSING
        The resolved value, or ``MISSING`` when any segment fails.
    """
    current: JsonValue = value
    for segment in path.split("."):
        if isinstance(current, dict):
            if segment not in current:
                return MISSING
            current = current[segment]
        elif isinstance(current, list):
            index = _array_index(segment)
            if index is None or index >= len(current):
                return MISSING
            current = current[index]
        else:
            return MISSING
    return current


def _extract_object(
    obj: dict[str, JsonValue], selectors: Sequence[str]
) -> dict[str, JsonValue]:
    reduced: dict[str, JsonValue] = {}
    for selector in selectors:
        if "." in selector:
            found = resolve_path(obj, selector)
            if found is not MISSING:
                reduced[flattened_key(selector)] = found
        elif selector in obj:
            reduced[selector] = obj[selector]
    return reduced


def extract_fields(value: JsonValue, selectors: Sequence[str]) -> JsonValue:
    """Reduce ``value`` to the selected fields.

    Objects keep only resolvable selectors, with dotted selectors flattened
    to underscore-joined keys. Arrays apply the extraction to each element.
    Scalars are returned unchanged.

    Examples
    --------
    >>> extract_fields({"user": {"profile": {"age": 30}}}, ["user.profile.age"])
    {'user_profile_age': 30}
    >>> extract_fields([{"id": 1, "x": 0}, {"id": 2}], ["id"])
    [{'id': 1}, {'id': 2}]
    """
    if isinstance(value, dict):
        return _extract_object(value, selectors)
    if isinstance(value, list):
        return [extract_fields(item, selectors) for item in value]
    return value


def parse_field_selectors(raw: str | None) -> tuple[str, ...] | None:
    """Split a comma-separated selector string.

    Entries are trimmed and empty entries dropped. ``None`` stays ``None``.
    """
    if raw is None:
        return None
    return tuple(part.strip() for part in raw.split(",") if part.strip())
