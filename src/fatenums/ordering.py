"""Ordering helpers for integer-backed enums.

Each helper compares one member against an explicit ordered list of sibling
members by value, and returns the matching siblings in list order. When no list
is given, the declaration order of the member's enum is used.

    >>> gt(Level.EIGHT)
    [<Level.NINE: 9>, <Level.TEN: 10>]
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable
from enum import Enum

from .exceptions import ForeignEnumeratorError, InvalidEnumeratorError


def _select(case: Enum, cases: Iterable[Enum] | None, compare: Callable[[int, int], bool]) -> list[Enum]:
    if not isinstance(case, Enum) or isinstance(case.value, bool) or not isinstance(case.value, int):
        raise InvalidEnumeratorError(f"{case!r} is not a member of an integer-backed enum")

    enum_type = type(case)
    candidates = list(enum_type) if cases is None else list(cases)

    for candidate in candidates:
        if not isinstance(candidate, enum_type):
            raise ForeignEnumeratorError(
                f"All enum cases must be instances of {enum_type.__module__}.{enum_type.__qualname__}"
            )

    return [candidate for candidate in candidates if compare(candidate.value, case.value)]


def eq(case: Enum, cases: Iterable[Enum] | None = None) -> list[Enum]:
    """Members with the same value as case."""
    return _select(case, cases, operator.eq)


def gt(case: Enum, cases: Iterable[Enum] | None = None) -> list[Enum]:
    """Members with a greater value than case."""
    return _select(case, cases, operator.gt)


def gte(case: Enum, cases: Iterable[Enum] | None = None) -> list[Enum]:
    """Members with a value greater than or equal to case."""
    return _select(case, cases, operator.ge)


def lt(case: Enum, cases: Iterable[Enum] | None = None) -> list[Enum]:
    """Members with a smaller value than case."""
    return _select(case, cases, operator.lt)


def lte(case: Enum, cases: Iterable[Enum] | None = None) -> list[Enum]:
    """Members with a value smaller than or equal to case."""
    return _select(case, cases, operator.le)
