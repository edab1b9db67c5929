"""Tests for MemoryLedger."""

import pytest

from smartctx.domain.entities import create_memory_entry
from smartctx.domain.exceptions import InvariantError
from smartctx.domain.services import MemoryLedger


class TestMemoryLedgerAppend:
    """Tests for append method."""

    def test_append_to_empty(self) -> None:
        """Test that any valid entry can start the ledger."""
        ledger = MemoryLedger()
        entry = create_memory_entry(5, 6, "first")

        ledger.append(entry)

        assert ledger.entries() == (entry,)
        assert ledger.last_covered_sequence == 6

    def test_append_contiguous(self) -> None:
        """Test appending entries that follow each other."""
        ledger = MemoryLedger()
        first = create_memory_entry(1, 2, "first")
        second = create_memory_entry(3, 4, "second")

        ledger.append(first)
        ledger.append(second)

        assert ledger.entries() == (first, second)
        assert len(ledger) == 2

    def test_append_overlap_rejected(self) -> None:
        """Test that an overlapping range raises and leaves the ledger intact."""
        ledger = MemoryLedger()
        first = create_memory_entry(1, 4, "first")
        ledger.append(first)

        with pytest.raises(InvariantError):
            ledger.append(create_memory_entry(4, 6, "overlap"))

        assert ledger.entries() == (first,)

    def test_append_backwards_rejected(self) -> None:
        """Test that an older range cannot follow a newer one."""
        ledger = MemoryLedger([create_memory_entry(5, 6, "newer")])

        with pytest.raises(InvariantError):
            ledger.append(create_memory_entry(1, 2, "older"))

    def test_init_validates_entries(self) -> None:
        """Test that restored entries go through the same checks."""
        with pytest.raises(InvariantError):
            MemoryLedger(
                [create_memory_entry(1, 4, "a"), create_memory_entry(2, 3, "b")]
            )


class TestMemoryLedgerRollback:
    """Tests for rollback method."""

    def test_rollback_last_entry(self) -> None:
        """Test that the most recent entry can be removed."""
        first = create_memory_entry(1, 2, "first")
        second = create_memory_entry(3, 4, "second")
        ledger = MemoryLedger([first, second])

        ledger.rollback(second)

        assert ledger.entries() == (first,)
        assert ledger.last_covered_sequence == 2

    def test_rollback_non_last_entry_rejected(self) -> None:
        """Test that only the newest entry can be rolled back."""
        first = create_memory_entry(1, 2, "first")
        ledger = MemoryLedger([first, create_memory_entry(3, 4, "second")])

        with pytest.raises(InvariantError):
            ledger.rollback(first)

        assert len(ledger) == 2

    def test_rollback_empty_rejected(self) -> None:
        """Test rollback on an empty ledger."""
        with pytest.raises(InvariantError):
            MemoryLedger().rollback(create_memory_entry(1, 2, "x"))


class TestMemoryLedgerQueries:
    """Tests for read accessors."""

    def test_empty_ledger(self) -> None:
        """Test an empty ledger."""
        ledger = MemoryLedger()

        assert ledger.entries() == ()
        assert ledger.last_covered_sequence is None
        assert len(ledger) == 0

    def test_entries_is_snapshot(self) -> None:
        """Test that entries() does not expose internal state."""
        ledger = MemoryLedger([create_memory_entry(1, 2, "first")])
        snapshot = ledger.entries()

        ledger.append(create_memory_entry(3, 4, "second"))

        assert len(snapshot) == 1
