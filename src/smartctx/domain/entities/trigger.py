"""Summarization trigger decision."""

from dataclasses import dataclass, field
from enum import Enum

from smartctx.domain.entities.message import Message


@dataclass(frozen=True)
class TriggerDecision:
    """Result of evaluating the live window against the threshold.

    Attributes:
        should_summarize: True when the window reached context_depth.
        chunk: Oldest messages selected for compression, in sequence order.
            Empty when should_summarize is False.
    """

    should_summarize: bool
    chunk: tuple[Message, ...] = field(default_factory=tuple)

    @classmethod
    def idle(cls) -> "TriggerDecision":
        return cls(should_summarize=False)

    @property
    def first_sequence(self) -> int | None:
        return self.chunk[0].sequence if self.chunk else None

    @property
    def last_sequence(self) -> int | None:
        return self.chunk[-1].sequence if self.chunk else None


class SummarizationOutcome(Enum):
    """What a summarization attempt did to the conversation."""

    SKIPPED = "skipped"
    COMMITTED = "committed"
    FAILED = "failed"
    ROLLED_BACK = "rolled_back"
    DISCARDED = "discarded"
