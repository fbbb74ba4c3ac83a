"""In-memory record store with by-path and by-date lookups.

``store`` is the arena that owns every Record. ``by_path`` and ``by_date``
only hold offsets into it, which is why ``merge`` must shift the offsets of
the incoming index by the current store length.
"""
from __future__ import annotations

import bisect
import logging
from datetime import date
from typing import Iterable

from weblogviz.services.logparser.schemas import Record

logger = logging.getLogger(__name__)


class LogIndex:
    """Append-only record store plus derived lookup structures.

    Invariant: every offset in ``by_path`` and ``by_date`` points into
    ``store`` at a record with the matching path and UTC date.

    Not thread-safe. An index is written by one worker (``insert``) and
    later by the single coordinator (``merge``), never concurrently.

    Record positions after merges are only "some total order consistent with
    each source's own order". Merging the same partial indices in a different
    sequence reorders ``store`` but never changes per-path or per-date counts.
    """

    def __init__(self) -> None:
        self.store: list[Record] = []
        self.by_path: dict[str, list[int]] = {}
        self.by_date: dict[date, list[int]] = {}
        # Sorted view of the by_date keys
        self._dates: list[date] = []

    @classmethod
    def from_records(cls, records: Iterable[Record]) -> "LogIndex":
        """Build a fresh index holding the given records in order."""
        index = cls()
        for record in records:
            index.insert(record)
        return index

    def __len__(self) -> int:
        return len(self.store)

    def __repr__(self) -> str:
        return (
            f"LogIndex(records={len(self.store)}, paths={len(self.by_path)}, "
            f"dates={len(self._dates)})"
        )

    def _date_slot(self, day: date) -> list[int]:
        slot = self.by_date.get(day)
        if slot is None:
            slot = self.by_date[day] = []
            bisect.insort(self._dates, day)
        return slot

    def insert(self, record: Record) -> int:
        """Append a record and index it by path and UTC date.

        Returns:
            The record's offset in ``store``.
        """
        offset = len(self.store)
        self.store.append(record)
        self.by_path.setdefault(record.path, []).append(offset)
        self._date_slot(record.date).append(offset)
        return offset

    def merge(self, other: "LogIndex") -> None:
        """Move every record of ``other`` into this index.

        ``other`` is consumed and must not be used afterwards.

        Raises:
            ValueError: If ``other`` is this index.
        """
        if other is self:
            raise ValueError("Cannot merge a LogIndex into itself")

        offset = len(self.store)
        self.store.extend(other.store)
        for path, indices in other.by_path.items():
            self.by_path.setdefault(path, []).extend(i + offset for i in indices)
        for day, indices in other.by_date.items():
            self._date_slot(day).extend(i + offset for i in indices)

        logger.debug(
            "Merged %d records at offset %d (%d paths, %d dates total)",
            len(other.store),
            offset,
            len(self.by_path),
            len(self._dates),
        )

    def dates(self) -> list[date]:
        """All dates present in the index, ascending."""
        return list(self._dates)

    def count_by_path(self) -> dict[str, int]:
        """Number of records per path."""
        return {path: len(indices) for path, indices in self.by_path.items()}

    def count_by_date(self) -> dict[date, int]:
        """Number of records per UTC date, ascending by date."""
        return {day: len(self.by_date[day]) for day in self._dates}

    def records_on_date(self, day: date) -> list[Record]:
        """Records whose UTC date is ``day``, in store order."""
        return [self.store[i] for i in self.by_date.get(day, ())]

    def records_for_path(self, path: str) -> list[Record]:
        """Records requesting ``path``, in store order."""
        return [self.store[i] for i in self.by_path.get(path, ())]
