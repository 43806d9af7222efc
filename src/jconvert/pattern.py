"""Filename glob matching."""

from __future__ import annotations

import fnmatch
import re

from jconvert.errors import InvalidPatternError

_SEPARATORS = "/\\"


def _class_end(pattern: str, start: int) -> int:
    """Return the index of the ``]`` closing the class opened at ``start``.

    Returns ``-1`` when the class is not terminated.
    """
    i = start + 1
    if i < len(pattern) and pattern[i] == "!":
        i += 1
    # A ']' right after '[' or '[!' is a class member.
    if i < len(pattern) and pattern[i] == "]":
        i += 1
    return pattern.find("]", i)


def _check_glob(pattern: str) -> None:
    """Reject patterns a strict shell-glob compiler would refuse."""
    i = 0
    length = len(pattern)
    while i < length:
        char = pattern[i]
        if char == "[":
            end = _class_end(pattern, i)
            if end < 0:
                raise InvalidPatternError(pattern, f"unterminated '[' at position {i}")
            i = end + 1
            continue
        if char == "*":
            run_end = i
            while run_end < length and pattern[run_end] == "*":
                run_end += 1
            run = run_end - i
            if run > 2:
                raise InvalidPatternError(
                    pattern, "wildcards are either regular '*' or recursive '**'"
                )
            if run == 2:
                before_ok = i == 0 or pattern[i - 1] in _SEPARATORS
                after_ok = run_end == length or pattern[run_end] in _SEPARATORS
                if not (before_ok and after_ok):
                    raise InvalidPatternError(
                        pattern, "recursive wildcards must form a single path component"
                    )
            i = run_end
            continue
        i += 1


class PatternMatcher:
    """Compiled filename filter.

    Parameters
    ----------
    pattern : str | None
        Shell-glob expression (``*``, ``?``, ``[...]``). ``None`` matches
        every filename.

    Raises
    ------
    InvalidPatternError
        If the pattern cannot be compiled.

    Examples
    --------
    >>> PatternMatcher("*_SUM_*").matches("data_SUM_1.json")
    True
    >>> PatternMatcher(None).matches("anything.json")
    True
    """

    __slots__ = ("_pattern", "_regex")

    def __init__(self, pattern: str | None = None) -> None:
        self._pattern = pattern
        self._regex: re.Pattern[str] | None = None
        if pattern is None:
            return
        _check_glob(pattern)
        try:
            self._regex = re.compile(fnmatch.translate(pattern))
        except re.error as exc:
            raise InvalidPatternError(pattern, str(exc)) from exc

    @property
    def pattern(self) -> str | None:
        """Source pattern string, if any."""
        return self._pattern

    @property
    def has_pattern(self) -> bool:
        """Whether a pattern is configured."""
        return self._regex is not None

    def matches(self, filename: str) -> bool:
        """Return whether ``filename`` passes the filter."""
        if self._regex is None:
            return True
        return self._regex.match(filename) is not None

    def __repr__(self) -> str:
        return f"PatternMatcher({self._pattern!r})"
