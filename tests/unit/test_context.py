"""Unit tests for the context helpers."""

from __future__ import annotations

import asyncio
import contextvars
from enum import Enum

import pytest

from fatenums.context import ContextStore, current_context, get, push, unshift
from fatenums.exceptions import InvalidEnumeratorError


class ContextUsers(Enum):
    HAPPY = "happy"
    SAD = "sad"


@pytest.fixture
def store() -> ContextStore:
    """Create an empty context store."""
    return ContextStore()


# =============================================================================
# Store Operation Tests
# =============================================================================


@pytest.mark.unit
class TestContextOperations:
    """Tests for push/unshift/get."""

    def test_get_missing_returns_empty(self, store: ContextStore) -> None:
        """Test that an unknown key reads as an empty list."""
        assert get(store, ContextUsers.HAPPY) == []
        assert ContextUsers.HAPPY.value not in store

    def test_push_appends(self, store: ContextStore) -> None:
        """Test that push appends in call order."""
        push(store, ContextUsers.HAPPY, "alice")
        push(store, ContextUsers.HAPPY, "bob")
        assert get(store, ContextUsers.HAPPY) == ["alice", "bob"]

    def test_unshift_prepends(self, store: ContextStore) -> None:
        """Test that unshift puts the value first."""
        push(store, ContextUsers.HAPPY, "alice")
        unshift(store, ContextUsers.HAPPY, "zoe")
        assert get(store, ContextUsers.HAPPY) == ["zoe", "alice"]

    def test_unshift_on_empty(self, store: ContextStore) -> None:
        """Test that unshift creates the list when missing."""
        unshift(store, ContextUsers.SAD, "carol")
        assert get(store, ContextUsers.SAD) == ["carol"]

    def test_keys_are_independent(self, store: ContextStore) -> None:
        """Test that members use separate lists keyed by value."""
        push(store, ContextUsers.HAPPY, "alice")
        push(store, ContextUsers.SAD, "bob")
        assert get(store, ContextUsers.HAPPY) == ["alice"]
        assert get(store, ContextUsers.SAD) == ["bob"]
        assert "happy" in store
        assert len(store) == 2

    def test_get_returns_copy(self, store: ContextStore) -> None:
        """Test that mutating the result does not change the store."""
        push(store, ContextUsers.HAPPY, "alice")
        get(store, ContextUsers.HAPPY).append("mallory")
        assert get(store, ContextUsers.HAPPY) == ["alice"]

    def test_clear(self, store: ContextStore) -> None:
        """Test that clear drops every key."""
        push(store, ContextUsers.HAPPY, "alice")
        store.clear()
        assert len(store) == 0

    def test_non_enum_key_raises(self, store: ContextStore) -> None:
        """Test that keys must be enum members."""
        with pytest.raises(InvalidEnumeratorError):
            push(store, "happy", "alice")  # type: ignore[arg-type]


@pytest.mark.unit
class TestCurrentContext:
    """Tests for current_context and per-context isolation."""

    def test_returns_shared_store(self) -> None:
        """Test that repeated calls return the same store handle."""
        assert current_context() is current_context()

    def test_separate_contexts_do_not_share_values(self) -> None:
        """Test that values pushed in one context are invisible in another."""
        first = contextvars.Context()
        second = contextvars.Context()

        first.run(lambda: push(current_context(), ContextUsers.HAPPY, "alice"))

        assert first.run(lambda: get(current_context(), ContextUsers.HAPPY)) == ["alice"]
        assert second.run(lambda: get(current_context(), ContextUsers.HAPPY)) == []

    def test_concurrent_tasks_get_their_own_values(self) -> None:
        """Test that asyncio tasks sharing a parent store keep their pushes apart."""

        async def worker(name: str) -> list[str]:
            push(current_context(), ContextUsers.HAPPY, name)
            await asyncio.sleep(0)
            return get(current_context(), ContextUsers.HAPPY)

        async def main() -> tuple[list[list[str]], list[str]]:
            current_context()
            results = await asyncio.gather(worker("a"), worker("b"))
            return list(results), get(current_context(), ContextUsers.HAPPY)

        results, parent = asyncio.run(main())

        assert results == [["a"], ["b"]]
        assert parent == []

    def test_tasks_inherit_parent_values(self) -> None:
        """Test that values set before a task starts are visible inside it."""

        async def worker(name: str) -> list[str]:
            unshift(current_context(), ContextUsers.SAD, name)
            return get(current_context(), ContextUsers.SAD)

        async def main() -> list[list[str]]:
            push(current_context(), ContextUsers.SAD, "parent")
            return list(await asyncio.gather(worker("a"), worker("b")))

        assert asyncio.run(main()) == [["a", "parent"], ["b", "parent"]]

    def test_nothing_leaks_out_of_asyncio_run(self) -> None:
        """Test that values written under asyncio.run stay out of the caller's context."""

        async def main() -> None:
            push(current_context(), ContextUsers.HAPPY, "inside")

        asyncio.run(main())
        assert get(current_context(), ContextUsers.HAPPY) == []
