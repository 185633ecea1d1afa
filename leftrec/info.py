from __future__ import annotations  # Requires Python 3.7 or later

from typing import Any, List, Protocol, Tuple, TypeVar

WORD_BITS = 64
DEFAULT_CAPACITY = 64

C = TypeVar("C", bound="HasRecursiveInfo")


def check_capacity(capacity: int) -> int:
    """Validate a flag capacity and return the number of words it needs."""
    words, extra = divmod(capacity, WORD_BITS)
    if capacity <= 0 or extra:
        raise ValueError(f"capacity must be a positive multiple of {WORD_BITS}, got {capacity!r}")
    return words


class HasRecursiveInfo(Protocol):
    """A cursor that carries recursion flags.

    The input type of a guarded rule must implement this.
    """

    def get_recursive_info(self) -> RecursiveInfo:
        ...

    def set_recursive_info(self: C, info: RecursiveInfo) -> C:
        ...


class HasRecursiveType(Protocol):
    def get_value(self) -> Any:
        ...


class RecursiveInfo:
    """Recursion flags: a fixed number of 64-bit words plus a carried value.

    Instances are values.  Every operation that changes a flag or the
    carried value returns a new instance.
    """

    __slots__ = ("_flag", "_copy")

    _flag: Tuple[int, ...]
    _copy: Any

    def __init__(self, capacity: int = DEFAULT_CAPACITY, copy: Any = None):
        self._flag = (0,) * check_capacity(capacity)
        self._copy = copy

    @classmethod
    def _make(cls, flag: Tuple[int, ...], copy: Any) -> RecursiveInfo:
        info = cls.__new__(cls)
        info._flag = flag
        info._copy = copy
        return info

    @property
    def capacity(self) -> int:
        return len(self._flag) * WORD_BITS

    def _locate(self, index: int) -> Tuple[int, int]:
        if not 0 <= index < self.capacity:
            raise IndexError(f"flag {index} out of range for capacity {self.capacity}")
        return divmod(index, WORD_BITS)

    def check_flag(self, index: int) -> bool:
        upper, lower = self._locate(index)
        return (self._flag[upper] >> lower) & 1 == 1

    def set_flag(self, index: int) -> RecursiveInfo:
        upper, lower = self._locate(index)
        flag = list(self._flag)
        flag[upper] |= 1 << lower
        return self._make(tuple(flag), self._copy)

    def clear_flag(self, index: int) -> RecursiveInfo:
        upper, lower = self._locate(index)
        flag = list(self._flag)
        flag[upper] &= ~(1 << lower)
        return self._make(tuple(flag), self._copy)

    def clear_all(self) -> RecursiveInfo:
        return self._make((0,) * len(self._flag), self._copy)

    def any_flag(self) -> bool:
        return any(self._flag)

    def flags(self) -> List[int]:
        """Return the indexes of all set flags, lowest first."""
        return [
            upper * WORD_BITS + lower
            for upper, word in enumerate(self._flag)
            for lower in range(WORD_BITS)
            if (word >> lower) & 1
        ]

    def get_copy(self) -> Any:
        return self._copy

    def set_copy(self, copy: Any) -> RecursiveInfo:
        return self._make(self._flag, copy)

    def get_recursive_info(self) -> RecursiveInfo:
        return self

    def set_recursive_info(self, info: RecursiveInfo) -> RecursiveInfo:
        return info

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecursiveInfo):
            return NotImplemented
        return self._flag == other._flag and self._copy == other._copy

    def __hash__(self) -> int:
        return hash(self._flag)

    def __repr__(self) -> str:
        return f"RecursiveInfo(capacity={self.capacity}, flags={self.flags()}, copy={self._copy!r})"
