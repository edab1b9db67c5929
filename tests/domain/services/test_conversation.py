"""Tests for ConversationState."""

from collections.abc import Callable

from smartctx.config import ContextConfig
from smartctx.domain.entities import Message, create_memory_entry
from smartctx.domain.services import ConversationState
from smartctx.domain.services.conversation import BACKLOG_PLACEHOLDER


class TestConversationState:
    """ConversationState tests."""

    def test_next_sequence_new_conversation(self, small_config: ContextConfig) -> None:
        """Test that numbering starts at 1."""
        assert ConversationState("c1", small_config).next_sequence() == 1

    def test_next_sequence_after_append(
        self, small_config: ContextConfig, make_message: Callable[..., Message]
    ) -> None:
        """Test that numbering follows the last appended message."""
        state = ConversationState("c1", small_config)
        state.append(make_message(1))
        state.append(make_message(2))

        assert state.next_sequence() == 3

    def test_next_sequence_from_ledger(self, small_config: ContextConfig) -> None:
        """Test that a restored ledger continues numbering."""
        state = ConversationState(
            "c1", small_config, [create_memory_entry(1, 6, "summary")]
        )

        assert state.next_sequence() == 7

    def test_reconfigure_applies_to_window(
        self, make_message: Callable[..., Message]
    ) -> None:
        """Test that the window reads the replaced config."""
        state = ConversationState(
            "c1", ContextConfig(context_depth=20, summarization_chunk_size=10)
        )
        for seq in range(1, 6):
            state.append(make_message(seq))

        state.reconfigure(ContextConfig(context_depth=4, summarization_chunk_size=2))

        assert state.config.context_depth == 4
        assert state.window.evaluate().should_summarize is True

    def test_reset(
        self, small_config: ContextConfig, make_message: Callable[..., Message]
    ) -> None:
        """Test that reset empties ledger and window but keeps numbering."""
        state = ConversationState(
            "c1", small_config, [create_memory_entry(1, 2, "summary")]
        )
        state.append(make_message(3))
        old_ledger = state.ledger

        state.reset()

        assert state.ledger is not old_ledger
        assert len(state.ledger) == 0
        assert len(state.window) == 0
        assert state.next_sequence() == 4

    def test_skip_backlog(
        self, small_config: ContextConfig, make_message: Callable[..., Message]
    ) -> None:
        """Test that an oversized window is covered by placeholder memories."""
        state = ConversationState("c1", small_config)
        state.window.restore([make_message(seq) for seq in range(1, 10)])

        placeholders = state.skip_backlog()

        assert [(e.source_range_start, e.source_range_end) for e in placeholders] == [
            (1, 2),
            (3, 4),
            (5, 6),
        ]
        assert placeholders[0].summary_text == BACKLOG_PLACEHOLDER.format(
            start=1, end=2
        )
        assert state.ledger.entries() == tuple(placeholders)
        assert [m.sequence for m in state.window.window()] == [7, 8, 9]
        assert len(state.window) < small_config.context_depth
        assert state.next_sequence() == 10

    def test_skip_backlog_continues_ledger(
        self, small_config: ContextConfig, make_message: Callable[..., Message]
    ) -> None:
        """Test that placeholders follow the restored ledger."""
        state = ConversationState(
            "c1", small_config, [create_memory_entry(1, 2, "summary")]
        )
        state.window.restore([make_message(seq) for seq in range(3, 9)])

        state.skip_backlog()

        assert [
            (e.source_range_start, e.source_range_end) for e in state.ledger.entries()
        ] == [(1, 2), (3, 4), (5, 6)]
        assert [m.sequence for m in state.window.window()] == [7, 8]

    def test_skip_backlog_at_depth_is_noop(
        self, small_config: ContextConfig, make_message: Callable[..., Message]
    ) -> None:
        """Test that a window not larger than context_depth is left alone."""
        state = ConversationState("c1", small_config)
        state.window.restore([make_message(seq) for seq in range(1, 5)])

        assert state.skip_backlog() == []
        assert len(state.ledger) == 0
        assert len(state.window) == 4
