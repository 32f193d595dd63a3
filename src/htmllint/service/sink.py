"""Error sink: ordered storage of error records, filtered by category."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from htmllint.models.errors import Category, ErrorRecord


class ErrorSink:
    """Keeps error records in the order they were reported.

    The category filter is applied when a record is added; records it
    rejects are dropped, and changing the filter never touches records
    already stored. An empty filter accepts everything.
    """

    def __init__(self, types: Iterable[Category] = ()) -> None:
        self._records: list[ErrorRecord] = []
        self._types: frozenset[Category] = frozenset(types)

    @property
    def types(self) -> frozenset[Category]:
        return self._types

    def set_types(self, types: Iterable[Category]) -> None:
        self._types = frozenset(types)

    def accepts(self, record: ErrorRecord) -> bool:
        return not self._types or record.is_type(*self._types)

    def add(self, record: ErrorRecord) -> bool:
        """Store *record* if the filter accepts it. Returns whether it was kept."""
        if not self.accepts(record):
            return False
        self._records.append(record)
        return True

    def records(self) -> list[ErrorRecord]:
        return list(self._records)

    def clear(self) -> None:
        self._records = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ErrorRecord]:
        return iter(list(self._records))
