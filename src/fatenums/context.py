"""Context helpers keyed by enum members.

Values are collected in lists on an explicit ContextStore, under the key
case.value. A store keeps its values in a ContextVar holding an immutable
snapshot; every write sets a new snapshot, so values written inside an asyncio
task or a contextvars.Context.run() call stay in that context. Values written
before a task is created are inherited by it.
"""

from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar
from enum import Enum
from types import MappingProxyType
from typing import Any

from .exceptions import InvalidEnumeratorError

_EMPTY: Mapping[Any, tuple[Any, ...]] = MappingProxyType({})


class ContextStore:
    """Mapping of key to list of collected values, scoped per execution context."""

    _values: ContextVar[Mapping[Any, tuple[Any, ...]]]

    def __init__(self, name: str = "fatenums_context_store") -> None:
        self._values = ContextVar(name)

    def __contains__(self, key: object) -> bool:
        return key in self._snapshot()

    def __len__(self) -> int:
        return len(self._snapshot())

    def _snapshot(self) -> Mapping[Any, tuple[Any, ...]]:
        return self._values.get(_EMPTY)

    def _replace(self, key: Any, values: tuple[Any, ...]) -> None:
        # Never mutate the snapshot in place: other contexts may still hold it
        updated = dict(self._snapshot())
        updated[key] = values
        self._values.set(MappingProxyType(updated))

    def clear(self) -> None:
        self._values.set(_EMPTY)


_default_store = ContextStore()


def current_context() -> ContextStore:
    """Return the process-wide store; its values are scoped to the running context."""
    return _default_store


def _key(case: Enum) -> Any:
    if not isinstance(case, Enum):
        raise InvalidEnumeratorError(f"Context key must be an enum member, got {type(case).__name__}")
    return case.value


def push(store: ContextStore, case: Enum, value: Any) -> None:
    """Append value to the list stored under case."""
    key = _key(case)
    store._replace(key, (*store._snapshot().get(key, ()), value))


def unshift(store: ContextStore, case: Enum, value: Any) -> None:
    """Prepend value to the list stored under case."""
    key = _key(case)
    store._replace(key, (value, *store._snapshot().get(key, ())))


def get(store: ContextStore, case: Enum) -> list[Any]:
    """Return the list stored under case, or an empty list."""
    return list(store._snapshot().get(_key(case), ()))
