"""Append-only ledger of summarized memory entries."""

from collections.abc import Iterable

from smartctx.domain.entities.memory import MemoryEntry
from smartctx.domain.exceptions import InvariantError


class MemoryLedger:
    """Ordered log of MemoryEntry, ascending by source_range_end.

    Entries never overlap and never go backwards. Gaps between ranges are
    accepted here; the summarization coordinator only commits a chunk that
    starts at the head of the live window, which keeps ranges contiguous.
    The only removal is rollback() of the most recent entry, which undoes a
    failed unit of work.
    """

    def __init__(self, entries: Iterable[MemoryEntry] = ()) -> None:
        self._entries: list[MemoryEntry] = []
        for entry in entries:
            self.append(entry)

    def append(self, entry: MemoryEntry) -> None:
        """Append an entry after the last one.

        Raises:
            InvariantError: If the entry overlaps or precedes the last entry.
        """
        if self._entries:
            last = self._entries[-1]
            if entry.source_range_start <= last.source_range_end:
                raise InvariantError(
                    f"Memory entry {entry.source_range_start}-"
                    f"{entry.source_range_end} overlaps ledger end "
                    f"{last.source_range_end}"
                )
        self._entries.append(entry)

    def rollback(self, entry: MemoryEntry) -> None:
        """Remove entry if it is the most recent one.

        Raises:
            InvariantError: If entry is not the last appended entry.
        """
        if not self._entries or self._entries[-1] is not entry:
            raise InvariantError("Only the most recent memory entry can be rolled back")
        self._entries.pop()

    def entries(self) -> tuple[MemoryEntry, ...]:
        return tuple(self._entries)

    @property
    def last_covered_sequence(self) -> int | None:
        """Sequence of the newest summarized message, or None if empty."""
        if not self._entries:
            return None
        return self._entries[-1].source_range_end

    def __len__(self) -> int:
        return len(self._entries)
