"""Tests for MemoryEntry entity."""

from datetime import datetime, timezone

import pytest

from smartctx.domain.entities import MemoryEntry, create_memory_entry


class TestMemoryEntry:
    """MemoryEntry tests."""

    def test_create_entry(self) -> None:
        """Test basic entry creation."""
        created = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        entry = MemoryEntry(
            source_range_start=1,
            source_range_end=2,
            summary_text="They met at the inn.",
            created_at=created,
        )

        assert entry.source_range_start == 1
        assert entry.source_range_end == 2
        assert entry.summary_text == "They met at the inn."
        assert entry.created_at == created

    def test_single_message_range(self) -> None:
        """Test that a range may cover a single message."""
        entry = create_memory_entry(5, 5, "summary")

        assert entry.source_range_start == entry.source_range_end == 5

    def test_invalid_range(self) -> None:
        """Test that start after end is rejected."""
        with pytest.raises(ValueError, match="Invalid source range"):
            create_memory_entry(3, 2, "summary")

    def test_create_memory_entry_sets_utc_time(self) -> None:
        """Test that create_memory_entry stamps an aware datetime."""
        entry = create_memory_entry(1, 2, "summary")

        assert entry.created_at.tzinfo is not None

    def test_entry_is_frozen(self) -> None:
        """Test that entry is immutable."""
        entry = create_memory_entry(1, 2, "summary")

        with pytest.raises(AttributeError):
            entry.summary_text = "changed"  # type: ignore[misc]
