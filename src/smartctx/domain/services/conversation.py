"""Per-conversation mutable state."""

import math
import threading
from collections.abc import Iterable

from smartctx.config.models import ContextConfig
from smartctx.domain.entities.memory import MemoryEntry, create_memory_entry
from smartctx.domain.entities.message import Message
from smartctx.domain.entities.trigger import TriggerDecision
from smartctx.domain.services.context_window import ContextWindowManager
from smartctx.domain.services.memory_ledger import MemoryLedger

BACKLOG_PLACEHOLDER = "[Summary of messages {start}-{end} was skipped]"


class ConversationState:
    """Live window, ledger and config of a single conversation.

    All writes (append, trim, ledger appends) go through ``lock`` so that a
    conversation has a single logical writer.

    Attributes:
        conversation_id: Conversation ID.
        window: Unsummarized messages.
        ledger: Summarized memory entries.
        lock: Guards window and ledger writes.
    """

    def __init__(
        self,
        conversation_id: str,
        config: ContextConfig,
        ledger_entries: Iterable[MemoryEntry] = (),
    ) -> None:
        self.conversation_id = conversation_id
        self._config = config
        self.lock = threading.RLock()
        self.window = ContextWindowManager(lambda: self._config)
        self.ledger = MemoryLedger(ledger_entries)

    @property
    def config(self) -> ContextConfig:
        return self._config

    def reconfigure(self, config: ContextConfig) -> None:
        """Replace the config; the next evaluation uses the new values."""
        with self.lock:
            self._config = config

    def append(self, message: Message) -> TriggerDecision:
        with self.lock:
            return self.window.append(message)

    def next_sequence(self) -> int:
        """Sequence number for the next message (1 for a new conversation)."""
        with self.lock:
            candidates = [
                s
                for s in (self.window.last_sequence, self.ledger.last_covered_sequence)
                if s is not None
            ]
            return max(candidates) + 1 if candidates else 1

    def reset(self) -> None:
        """Forget all memory: empty ledger and window."""
        with self.lock:
            self.ledger = MemoryLedger()
            self.window.clear()

    def skip_backlog(self) -> list[MemoryEntry]:
        """Cover an oversized window with placeholder memories.

        A restored window can hold far more than context_depth messages, for
        instance after repeated summarization failures or a lowered depth.
        Instead of one summarizer call per chunk, whole chunks from the head
        are replaced by placeholder entries until the window is below
        context_depth. A window at or below context_depth is left alone.

        Returns:
            Placeholder entries appended to the ledger.
        """
        with self.lock:
            live = self.window.window()
            depth = self._config.context_depth
            if len(live) <= depth:
                return []

            chunk_size = min(self._config.summarization_chunk_size, depth)
            chunk_count = math.ceil((len(live) - depth + 1) / chunk_size)
            skipped = live[: chunk_count * chunk_size]

            entries: list[MemoryEntry] = []
            for offset in range(0, len(skipped), chunk_size):
                chunk = skipped[offset : offset + chunk_size]
                start, end = chunk[0].sequence, chunk[-1].sequence
                entry = create_memory_entry(
                    start, end, BACKLOG_PLACEHOLDER.format(start=start, end=end)
                )
                self.ledger.append(entry)
                entries.append(entry)
            self.window.trim(skipped[-1].sequence)
            return entries
