"""Message formatting utilities for prompts."""

import re
from collections.abc import Iterable

from smartctx.config.models import CHAT_HISTORY_SLICE_PLACEHOLDER
from smartctx.domain.entities.message import Message

_USER_MACRO = re.compile(r"\{\{user\}\}", re.IGNORECASE)
_CHAR_MACRO = re.compile(r"\{\{char\}\}", re.IGNORECASE)


def format_message_with_role(message: Message) -> str:
    """Format a message as a role-prefixed line.

    Args:
        message: The message to format.

    Returns:
        Formatted string like "user: message text"
    """
    return f"{message.role.value}: {message.content}"


def format_chat_history_slice(messages: Iterable[Message]) -> str:
    """Render a chunk for the summarization prompt.

    Args:
        messages: Messages to render.

    Returns:
        One role-prefixed line per message, in sequence order.
    """
    ordered = sorted(messages, key=lambda msg: msg.sequence)
    return "\n".join(format_message_with_role(msg) for msg in ordered)


def build_summarization_prompt(template: str, messages: Iterable[Message]) -> str:
    """Substitute the chunk into the summarization prompt template.

    Args:
        template: Prompt containing {{chat_history_slice}}.
        messages: Chunk to summarize.

    Returns:
        The prompt sent to the summarizer.
    """
    return template.replace(
        CHAT_HISTORY_SLICE_PLACEHOLDER, format_chat_history_slice(messages)
    )


def replace_history_macros(text: str, user_name: str, char_name: str) -> str:
    """Replace {{user}} and {{char}} macros (case-insensitive).

    Args:
        text: Message content.
        user_name: Value for {{user}}.
        char_name: Value for {{char}}.

    Returns:
        Text with macros expanded.
    """
    result = _USER_MACRO.sub(lambda _: user_name, text)
    return _CHAR_MACRO.sub(lambda _: char_name, result)
