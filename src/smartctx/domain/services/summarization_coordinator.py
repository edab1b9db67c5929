"""Serialized compress-and-merge of conversation history."""

import asyncio
import logging
from collections.abc import Callable

from smartctx.domain.entities.memory import create_memory_entry
from smartctx.domain.entities.trigger import SummarizationOutcome, TriggerDecision
from smartctx.domain.exceptions import InvariantError, SummarizationFailure
from smartctx.domain.services.conversation import ConversationState
from smartctx.domain.services.message_formatter import build_summarization_prompt
from smartctx.domain.services.protocols import CommitHook, SummarizeFn

logger = logging.getLogger(__name__)

ConversationLookup = Callable[[str], ConversationState | None]


class SummarizationCoordinator:
    """Runs at most one summarization per conversation at a time.

    Each conversation gets an asyncio.Lock slot. A trigger that arrives while
    another is in flight waits for the slot and then re-evaluates the window,
    so it acts on the message count at that moment rather than the stale
    decision. The ledger append and window trim of a successful call are
    applied together under the conversation lock, or not at all.
    """

    def __init__(
        self,
        conversation_lookup: ConversationLookup,
        on_committed: CommitHook | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            conversation_lookup: Returns the live state of a conversation, or
                None once it has been deleted.
            on_committed: Optional async hook called after each commit.
        """
        self._lookup = conversation_lookup
        self._on_committed = on_committed
        self._slots: dict[str, asyncio.Lock] = {}

    def is_summarizing(self, conversation_id: str) -> bool:
        slot = self._slots.get(conversation_id)
        return slot is not None and slot.locked()

    def forget(self, conversation_id: str) -> None:
        """Drop the slot of a deleted conversation."""
        self._slots.pop(conversation_id, None)

    async def maybe_trigger(
        self,
        conversation_id: str,
        decision: TriggerDecision,
        summarize_fn: SummarizeFn,
    ) -> SummarizationOutcome:
        """Summarize the oldest chunk if the decision asks for it.

        Summarization failures never propagate: the window is left intact
        and the next append reports should_summarize again.

        Args:
            conversation_id: Conversation to compress.
            decision: Result of the append that may have crossed the threshold.
            summarize_fn: External summarization call.

        Returns:
            Outcome of the last attempt made while holding the slot.
        """
        if not decision.should_summarize:
            return SummarizationOutcome.SKIPPED

        slot = self._slots.setdefault(conversation_id, asyncio.Lock())
        if slot.locked():
            logger.debug(
                "Summarization in flight for %s; queueing trigger", conversation_id
            )

        async with slot:
            outcome = SummarizationOutcome.SKIPPED
            state = self._lookup(conversation_id)
            while True:
                # A conversation reopened under the same id has its own slot.
                if state is None or self._lookup(conversation_id) is not state:
                    logger.info(
                        "Conversation %s no longer exists; skipping summarization",
                        conversation_id,
                    )
                    return SummarizationOutcome.DISCARDED

                with state.lock:
                    current = state.window.evaluate()
                if not current.should_summarize:
                    return outcome

                outcome = await self._summarize_chunk(state, current, summarize_fn)
                if outcome is not SummarizationOutcome.COMMITTED:
                    return outcome

    async def _summarize_chunk(
        self,
        state: ConversationState,
        decision: TriggerDecision,
        summarize_fn: SummarizeFn,
    ) -> SummarizationOutcome:
        """Call the summarizer for one chunk and apply the result."""
        conversation_id = state.conversation_id
        first = decision.first_sequence
        last = decision.last_sequence
        if first is None or last is None:
            raise InvariantError("Summarization decision carries no chunk")

        prompt = build_summarization_prompt(
            state.config.summarization_prompt, decision.chunk
        )
        logger.info(
            "Summarizing messages %d-%d of conversation %s",
            first,
            last,
            conversation_id,
        )

        try:
            summary = await summarize_fn(prompt)
        except asyncio.CancelledError:
            logger.warning("%s", SummarizationFailure(conversation_id, "cancelled"))
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            return SummarizationOutcome.FAILED
        except Exception as e:
            failure = SummarizationFailure(conversation_id, str(e) or type(e).__name__)
            logger.warning("%s; keeping window for retry", failure)
            return SummarizationOutcome.FAILED

        if not summary or not summary.strip():
            logger.warning(
                "%s", SummarizationFailure(conversation_id, "empty summary")
            )
            return SummarizationOutcome.FAILED

        if self._lookup(conversation_id) is not state:
            logger.info(
                "Conversation %s was deleted during summarization; discarding result",
                conversation_id,
            )
            return SummarizationOutcome.DISCARDED

        entry = create_memory_entry(first, last, summary.strip())
        with state.lock:
            live = state.window.window()
            if not live or live[0].sequence != first:
                logger.warning(
                    "Window of %s no longer starts at %d; dropping summary of %d-%d",
                    conversation_id,
                    first,
                    first,
                    last,
                )
                return SummarizationOutcome.ROLLED_BACK
            ledger = state.ledger
            try:
                ledger.append(entry)
            except InvariantError:
                logger.exception(
                    "Ledger rejected summary of %d-%d for %s", first, last, conversation_id
                )
                return SummarizationOutcome.ROLLED_BACK
            try:
                removed = state.window.trim(last)
            except InvariantError:
                ledger.rollback(entry)
                logger.exception(
                    "Window trim to %d failed for %s; rolled back memory entry",
                    last,
                    conversation_id,
                )
                return SummarizationOutcome.ROLLED_BACK

        logger.info(
            "Stored memory %d-%d for %s (trimmed %d, %d live)",
            first,
            last,
            conversation_id,
            removed,
            len(state.window),
        )

        if self._on_committed is not None:
            try:
                await self._on_committed(conversation_id, entry)
            except Exception:
                logger.exception(
                    "Commit hook failed for memory %d-%d of %s",
                    first,
                    last,
                    conversation_id,
                )

        return SummarizationOutcome.COMMITTED
