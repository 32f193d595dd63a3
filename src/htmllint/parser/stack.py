"""Element stack: reconstructs nesting from a flat tag event stream."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class StackEntry:
    """An element opened at ``(line, column)`` and not yet closed."""

    tag: str
    line: int
    column: int


class ElementStack:
    """Open, non-empty elements, oldest at the bottom.

    Closing a tag may match an entry below the top; everything above the
    match is then popped along with it.
    """

    def __init__(self) -> None:
        self._entries: list[StackEntry] = []

    def push(self, tag: str, line: int, column: int) -> None:
        self._entries.append(StackEntry(tag, line, column))

    def find(self, tag: str) -> int | None:
        """Index of the top-most entry for *tag*, or ``None`` if it is not open."""
        for offset in range(len(self._entries) - 1, -1, -1):
            if self._entries[offset].tag == tag:
                return offset
        return None

    def pop_back_to(self, tag: str) -> list[StackEntry] | None:
        """Close *tag*, returning the entries left open above it.

        Leftovers come most-recently-opened first. Returns ``None`` and
        leaves the stack untouched when *tag* is not open.
        """
        offset = self.find(tag)
        if offset is None:
            return None
        leftovers = self._entries[offset + 1 :]
        del self._entries[offset:]
        leftovers.reverse()
        return leftovers

    def clear(self) -> None:
        self._entries.clear()

    @property
    def tags(self) -> list[str]:
        return [entry.tag for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[StackEntry]:
        return iter(self._entries)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and self.find(tag) is not None
