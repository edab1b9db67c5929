"""Domain service protocols."""

from collections.abc import Awaitable, Callable
from typing import Protocol

from smartctx.domain.entities.memory import MemoryEntry

# External summarization call: prompt in, summary text out. May raise or be
# cancelled; both are treated as a failed attempt.
SummarizeFn = Callable[[str], Awaitable[str]]

# Called after a memory entry has been committed to a conversation.
CommitHook = Callable[[str, MemoryEntry], Awaitable[None]]


class ReplyGenerator(Protocol):
    """Generates the assistant reply for an assembled prompt."""

    async def generate(self, context: str, user_input: str) -> str:
        """Generate a reply.

        Args:
            context: Prompt built from persona, memory and history.
            user_input: Latest user message.

        Returns:
            Assistant reply text.
        """
        ...
