"""Conversation memory engine service."""

import asyncio
import logging

from smartctx.config.models import ContextConfig
from smartctx.domain.entities.memory import MemoryEntry
from smartctx.domain.entities.message import Message, Role, create_message
from smartctx.domain.entities.trigger import SummarizationOutcome, TriggerDecision
from smartctx.domain.exceptions import ConversationNotFoundError
from smartctx.domain.repositories.memory_repository import MemoryRepository
from smartctx.domain.repositories.message_repository import MessageRepository
from smartctx.domain.services.conversation import ConversationState
from smartctx.domain.services.persona_registry import PersonaRegistry
from smartctx.domain.services.prompt_assembler import PromptAssembler
from smartctx.domain.services.protocols import SummarizeFn
from smartctx.domain.services.summarization_coordinator import (
    SummarizationCoordinator,
)

logger = logging.getLogger(__name__)


class ConversationMemoryEngine:
    """Read/write surface for conversations.

    Wires the live window, ledger, coordinator and assembler together and
    mirrors committed state into the repositories when they are given.
    Messages are appended immediately; summarization triggered by
    post_message() runs as a background task so appends never wait for it.
    """

    def __init__(
        self,
        persona_registry: PersonaRegistry,
        summarize_fn: SummarizeFn,
        prompt_assembler: PromptAssembler | None = None,
        message_repository: MessageRepository | None = None,
        memory_repository: MemoryRepository | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            persona_registry: Registry providing the active persona.
            summarize_fn: External summarization call.
            prompt_assembler: Assembler for build_prompt().
            message_repository: Optional store for messages.
            memory_repository: Optional store for memory entries.
        """
        self._persona_registry = persona_registry
        self._summarize_fn = summarize_fn
        self._prompt_assembler = prompt_assembler or PromptAssembler()
        self._message_repository = message_repository
        self._memory_repository = memory_repository
        self._conversations: dict[str, ConversationState] = {}
        self._tasks: dict[str, set[asyncio.Task[SummarizationOutcome]]] = {}
        self._coordinator = SummarizationCoordinator(
            self._conversations.get,
            on_committed=self._store_memory_entry if memory_repository else None,
        )

    @property
    def coordinator(self) -> SummarizationCoordinator:
        return self._coordinator

    @property
    def conversation_ids(self) -> list[str]:
        return list(self._conversations)

    async def open_conversation(
        self,
        conversation_id: str,
        config: ContextConfig,
        skip_backlog: bool = False,
    ) -> ConversationState:
        """Open a conversation, restoring stored memory and messages.

        If the conversation is already open its config is replaced.

        Args:
            conversation_id: Conversation ID.
            config: Context configuration for the conversation.
            skip_backlog: Replace a restored window larger than context_depth
                with placeholder memories instead of summarizing it chunk by
                chunk.

        Returns:
            The conversation state.
        """
        existing = self._conversations.get(conversation_id)
        if existing is not None:
            existing.reconfigure(config)
            return existing

        entries: list[MemoryEntry] = []
        if self._memory_repository is not None:
            entries = await self._memory_repository.find_all(conversation_id)

        state = ConversationState(conversation_id, config, entries)

        if self._message_repository is not None:
            last_covered = state.ledger.last_covered_sequence
            messages = await self._message_repository.find_after(
                conversation_id, last_covered
            )
            max_sequence = await self._message_repository.find_max_sequence(
                conversation_id
            )
            state.window.restore(messages, max_sequence)

        if skip_backlog:
            placeholders = state.skip_backlog()
            if placeholders:
                logger.info(
                    "Skipped summarization backlog of %s: messages %d-%d",
                    conversation_id,
                    placeholders[0].source_range_start,
                    placeholders[-1].source_range_end,
                )
            for entry in placeholders:
                await self._store_memory_entry(conversation_id, entry)

        self._conversations[conversation_id] = state
        logger.info(
            "Opened conversation %s (memories=%d, live=%d)",
            conversation_id,
            len(state.ledger),
            len(state.window),
        )
        return state

    def get_state(self, conversation_id: str) -> ConversationState:
        """Get an open conversation.

        Raises:
            ConversationNotFoundError: If the conversation is not open.
        """
        state = self._conversations.get(conversation_id)
        if state is None:
            raise ConversationNotFoundError(conversation_id)
        return state

    def reconfigure(self, conversation_id: str, config: ContextConfig) -> None:
        self.get_state(conversation_id).reconfigure(config)

    def window(self, conversation_id: str) -> tuple[Message, ...]:
        return self.get_state(conversation_id).window.window()

    def ledger(self, conversation_id: str) -> tuple[MemoryEntry, ...]:
        return self.get_state(conversation_id).ledger.entries()

    async def append(self, conversation_id: str, message: Message) -> TriggerDecision:
        """Append a caller-numbered message.

        Args:
            conversation_id: Conversation ID.
            message: Message whose sequence exceeds the last appended one.

        Returns:
            TriggerDecision for the window after the append.

        Raises:
            ConversationNotFoundError: If the conversation is not open.
            OutOfOrderError: If the sequence does not increase.
        """
        decision = self.get_state(conversation_id).append(message)
        await self._store_message(conversation_id, message)
        return decision

    async def append_message(
        self, conversation_id: str, role: Role, content: str
    ) -> TriggerDecision:
        """Append a message numbered with the conversation's next sequence."""
        state = self.get_state(conversation_id)
        with state.lock:
            message = create_message(role, content, state.next_sequence())
            decision = state.append(message)
        await self._store_message(conversation_id, message)
        return decision

    async def post_message(
        self, conversation_id: str, role: Role, content: str
    ) -> TriggerDecision:
        """Append a message and schedule summarization when needed.

        Returns:
            TriggerDecision of the append.
        """
        decision = await self.append_message(conversation_id, role, content)
        if decision.should_summarize:
            self._schedule(conversation_id, decision)
        return decision

    async def summarize_now(self, conversation_id: str) -> SummarizationOutcome:
        """Evaluate the window and summarize in the foreground."""
        state = self.get_state(conversation_id)
        with state.lock:
            decision = state.window.evaluate()
        return await self._coordinator.maybe_trigger(
            conversation_id, decision, self._summarize_fn
        )

    async def wait_idle(self, conversation_id: str | None = None) -> None:
        """Wait until scheduled summarizations have finished.

        Args:
            conversation_id: Conversation to wait for, or None for all.
        """
        if conversation_id is None:
            tasks = [t for group in self._tasks.values() for t in group]
        else:
            tasks = list(self._tasks.get(conversation_id, ()))
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def build_prompt(self, conversation_id: str) -> str:
        """Assemble the prompt with the registry's active persona."""
        state = self.get_state(conversation_id)
        return self._prompt_assembler.build(
            state, self._persona_registry.get_active()
        )

    async def reset_memory(self, conversation_id: str) -> None:
        """Forget the conversation's memory and live messages."""
        self.get_state(conversation_id).reset()
        await self._delete_stored(conversation_id)
        logger.info("Reset memory of conversation %s", conversation_id)

    async def delete_conversation(self, conversation_id: str) -> None:
        """Delete a conversation.

        A summarization in flight for it completes on its own and its result
        is discarded.
        """
        if self._conversations.pop(conversation_id, None) is None:
            return
        self._coordinator.forget(conversation_id)
        await self._delete_stored(conversation_id)
        logger.info("Deleted conversation %s", conversation_id)

    def _schedule(self, conversation_id: str, decision: TriggerDecision) -> None:
        task = asyncio.create_task(
            self._coordinator.maybe_trigger(
                conversation_id, decision, self._summarize_fn
            )
        )
        group = self._tasks.setdefault(conversation_id, set())
        group.add(task)

        def _done(finished: asyncio.Task[SummarizationOutcome]) -> None:
            group.discard(finished)
            if not group and self._tasks.get(conversation_id) is group:
                del self._tasks[conversation_id]
            if not finished.cancelled() and finished.exception() is not None:
                logger.error(
                    "Summarization task for %s failed",
                    conversation_id,
                    exc_info=finished.exception(),
                )

        task.add_done_callback(_done)

    async def _store_message(self, conversation_id: str, message: Message) -> None:
        if self._message_repository is not None:
            await self._message_repository.save(conversation_id, message)

    async def _store_memory_entry(
        self, conversation_id: str, entry: MemoryEntry
    ) -> None:
        if self._memory_repository is not None:
            await self._memory_repository.append(conversation_id, entry)

    async def _delete_stored(self, conversation_id: str) -> None:
        if self._memory_repository is not None:
            await self._memory_repository.delete_by_conversation(conversation_id)
        if self._message_repository is not None:
            await self._message_repository.delete_by_conversation(conversation_id)
