"""Tests for message_formatter module."""

from collections.abc import Callable

from smartctx.config import CHAT_HISTORY_SLICE_PLACEHOLDER
from smartctx.domain.entities import Message, Role
from smartctx.domain.services.message_formatter import (
    build_summarization_prompt,
    format_chat_history_slice,
    format_message_with_role,
    replace_history_macros,
)


class TestFormatMessageWithRole:
    """Tests for format_message_with_role function."""

    def test_user_message(self, make_message: Callable[..., Message]) -> None:
        """Test formatting a user line."""
        message = make_message(1, "Hello there", Role.USER)

        assert format_message_with_role(message) == "user: Hello there"

    def test_assistant_message(self, make_message: Callable[..., Message]) -> None:
        """Test formatting an assistant line."""
        message = make_message(2, "Welcome!", Role.ASSISTANT)

        assert format_message_with_role(message) == "assistant: Welcome!"


class TestFormatChatHistorySlice:
    """Tests for format_chat_history_slice function."""

    def test_sorted_by_sequence(self, make_message: Callable[..., Message]) -> None:
        """Test that lines come out in sequence order."""
        result = format_chat_history_slice(
            [make_message(2, "second"), make_message(1, "first")]
        )

        assert result == "user: first\nassistant: second"

    def test_empty(self) -> None:
        """Test an empty slice."""
        assert format_chat_history_slice([]) == ""


class TestBuildSummarizationPrompt:
    """Tests for build_summarization_prompt function."""

    def test_substitutes_placeholder(
        self, make_message: Callable[..., Message]
    ) -> None:
        """Test inserting the chunk into the template."""
        template = f"Summarize:\n{CHAT_HISTORY_SLICE_PLACEHOLDER}\nEnd."

        result = build_summarization_prompt(
            template, [make_message(1, "Hi"), make_message(2, "Hello")]
        )

        assert result == "Summarize:\nuser: Hi\nassistant: Hello\nEnd."

    def test_leaves_other_braces(self, make_message: Callable[..., Message]) -> None:
        """Test that unrelated macros in the template are left alone."""
        template = "About {{char}}: " + CHAT_HISTORY_SLICE_PLACEHOLDER

        result = build_summarization_prompt(template, [make_message(1, "Hi")])

        assert result == "About {{char}}: user: Hi"


class TestReplaceHistoryMacros:
    """Tests for replace_history_macros function."""

    def test_replaces_both_macros(self) -> None:
        """Test replacing {{user}} and {{char}}."""
        result = replace_history_macros("{{user}} greets {{char}}", "Alice", "Aria")

        assert result == "Alice greets Aria"

    def test_case_insensitive(self) -> None:
        """Test that macro names are matched case-insensitively."""
        result = replace_history_macros("{{USER}} and {{Char}}", "Alice", "Aria")

        assert result == "Alice and Aria"

    def test_names_with_backslashes(self) -> None:
        """Test that replacement names are inserted literally."""
        result = replace_history_macros("{{user}}", r"A\1", "Aria")

        assert result == r"A\1"
