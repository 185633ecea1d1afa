from __future__ import annotations  # Requires Python 3.7 or later

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Dict, Hashable, Iterator, Optional

from leftrec.info import DEFAULT_CAPACITY, RecursiveInfo, check_capacity


class CapacityError(Exception):
    """More guarded rules than the recursion flags can hold."""

    def __init__(self, capacity: int):
        super().__init__(
            f"Recursive tracers exceed the maximum number ({capacity}). "
            f"Use a registry with a wider capacity (e.g. {capacity * 2}) to extend it."
        )
        self.capacity = capacity


class RecursiveIndexes:
    """Map rule identities to flag indexes.

    Indexes are handed out in first-seen order starting at 0 and are never
    reused.  The registry also holds the verbose-tracing state of the
    guarded rules that use it.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, *, verbose: bool = False):
        check_capacity(capacity)
        self.capacity = capacity
        self.verbose = verbose
        self.level = 0
        self._indexes: Dict[Hashable, int] = {}
        self._next = 0

    def get(self, key: Hashable) -> int:
        index = self._indexes.get(key)
        if index is not None:
            return index
        index = self._next
        if index >= self.capacity:
            raise CapacityError(self.capacity)
        self._next += 1
        self._indexes[key] = index
        return index

    def new_info(self) -> RecursiveInfo:
        return RecursiveInfo(self.capacity)

    def __len__(self) -> int:
        return self._next

    def __contains__(self, key: object) -> bool:
        return key in self._indexes

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._indexes)

    def __repr__(self) -> str:
        return f"RecursiveIndexes(capacity={self.capacity}, used={self._next})"


_current: ContextVar[Optional[RecursiveIndexes]] = ContextVar("leftrec_registry", default=None)


def current_registry() -> RecursiveIndexes:
    """Return the registry of the current context, creating it on first use."""
    registry = _current.get()
    if registry is None:
        registry = RecursiveIndexes()
        _current.set(registry)
    return registry


@contextmanager
def use_registry(registry: Optional[RecursiveIndexes] = None) -> Iterator[RecursiveIndexes]:
    """Install a registry (a fresh one by default) for the duration of a with block."""
    if registry is None:
        registry = RecursiveIndexes()
    token = _current.set(registry)
    try:
        yield registry
    finally:
        _current.reset(token)
