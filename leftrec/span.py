from __future__ import annotations  # Requires Python 3.7 or later

from typing import Any, NamedTuple, Tuple

from leftrec.info import DEFAULT_CAPACITY, RecursiveInfo


class Span(NamedTuple):
    """The remaining input plus where it starts and an attached payload.

    The payload (``extra``) must implement get_recursive_info() and
    set_recursive_info(); a bare RecursiveInfo does.  Advancing never
    touches the payload.
    """

    fragment: str
    offset: int = 0
    line: int = 1
    column: int = 1
    extra: Any = None

    @classmethod
    def new(cls, fragment: str, capacity: int = DEFAULT_CAPACITY) -> Span:
        return cls(fragment, extra=RecursiveInfo(capacity))

    @classmethod
    def new_extra(cls, fragment: str, extra: Any) -> Span:
        return cls(fragment, extra=extra)

    def take_split(self, count: int) -> Tuple[Span, Span]:
        """Split off the first count characters; return (rest, taken)."""
        if not 0 <= count <= len(self.fragment):
            raise ValueError(f"cannot take {count} characters from {len(self.fragment)}")
        taken = self.fragment[:count]
        newlines = taken.count("\n")
        if newlines:
            line = self.line + newlines
            column = count - taken.rfind("\n")
        else:
            line = self.line
            column = self.column + count
        rest = Span(self.fragment[count:], self.offset + count, line, column, self.extra)
        return rest, self._replace(fragment=taken)

    def get_value(self) -> str:
        return self.fragment

    def get_recursive_info(self) -> RecursiveInfo:
        return self.extra.get_recursive_info()

    def set_recursive_info(self, info: RecursiveInfo) -> Span:
        return self._replace(extra=self.extra.set_recursive_info(info))

    def __str__(self) -> str:
        return f"{self.line}.{self.column}: {self.fragment!r:.25}"
