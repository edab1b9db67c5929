"""Live window of unsummarized messages."""

import logging
from collections.abc import Callable, Iterable

from smartctx.config.models import ContextConfig
from smartctx.domain.entities.message import Message
from smartctx.domain.entities.trigger import TriggerDecision
from smartctx.domain.exceptions import InvariantError, OutOfOrderError

logger = logging.getLogger(__name__)


class ContextWindowManager:
    """Owns the unsummarized tail of one conversation.

    The threshold is evaluated against the config returned by config_provider
    on every call, so a lowered context_depth takes effect on the next append.
    append() never trims; the window only shrinks through trim(), which the
    summarization coordinator calls once a summary has been stored.
    """

    def __init__(self, config_provider: Callable[[], ContextConfig]) -> None:
        """Initialize the window.

        Args:
            config_provider: Returns the conversation's current ContextConfig.
        """
        self._config_provider = config_provider
        self._messages: list[Message] = []
        self._last_sequence: int | None = None

    @property
    def last_sequence(self) -> int | None:
        """Sequence of the last appended message, including trimmed ones."""
        return self._last_sequence

    def append(self, message: Message) -> TriggerDecision:
        """Append a message to the tail and evaluate the threshold.

        Args:
            message: Message with a sequence greater than the last one.

        Returns:
            TriggerDecision for the window after the append.

        Raises:
            OutOfOrderError: If the sequence does not increase.
        """
        if self._last_sequence is not None and message.sequence <= self._last_sequence:
            raise OutOfOrderError(message.sequence, self._last_sequence)

        self._messages.append(message)
        self._last_sequence = message.sequence
        return self.evaluate()

    def evaluate(self) -> TriggerDecision:
        """Check the window against the current threshold without mutating it.

        Returns:
            TriggerDecision carrying the oldest chunk when the window has
            reached context_depth.
        """
        config = self._config_provider()
        if len(self._messages) < config.context_depth:
            return TriggerDecision.idle()

        chunk_size = min(config.summarization_chunk_size, config.context_depth)
        chunk = tuple(self._messages[:chunk_size])
        logger.debug(
            "Threshold reached: window=%d depth=%d chunk=%d-%d",
            len(self._messages),
            config.context_depth,
            chunk[0].sequence,
            chunk[-1].sequence,
        )
        return TriggerDecision(should_summarize=True, chunk=chunk)

    def trim(self, upto_sequence: int) -> int:
        """Remove every message with sequence <= upto_sequence from the head.

        Args:
            upto_sequence: Sequence of the last message to remove.

        Returns:
            Number of removed messages.

        Raises:
            InvariantError: If the cut point is not a live message boundary.
        """
        if not self._messages:
            raise InvariantError(f"Cannot trim to {upto_sequence}: window is empty")
        if upto_sequence < self._messages[0].sequence:
            raise InvariantError(
                f"Cannot trim to {upto_sequence}: already removed "
                f"(window starts at {self._messages[0].sequence})"
            )

        for index, message in enumerate(self._messages):
            if message.sequence == upto_sequence:
                del self._messages[: index + 1]
                return index + 1
            if message.sequence > upto_sequence:
                break

        raise InvariantError(
            f"Cannot trim to {upto_sequence}: not a message boundary"
        )

    def window(self) -> tuple[Message, ...]:
        """Read-only snapshot of the live window."""
        return tuple(self._messages)

    def restore(self, messages: Iterable[Message], last_sequence: int | None = None) -> None:
        """Replace the window with a persisted tail.

        Args:
            messages: Unsummarized messages in sequence order.
            last_sequence: Highest sequence ever used by the conversation,
                when it is larger than the last restored message.

        Raises:
            OutOfOrderError: If the messages are not strictly increasing.
        """
        restored: list[Message] = []
        previous: int | None = None
        for message in messages:
            if previous is not None and message.sequence <= previous:
                raise OutOfOrderError(message.sequence, previous)
            restored.append(message)
            previous = message.sequence

        self._messages = restored
        candidates = [s for s in (previous, last_sequence) if s is not None]
        self._last_sequence = max(candidates) if candidates else None

    def clear(self) -> None:
        """Drop every live message, keeping the sequence high-water mark."""
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)
