"""Domain services."""

from smartctx.domain.services.context_window import ContextWindowManager
from smartctx.domain.services.conversation import ConversationState
from smartctx.domain.services.memory_ledger import MemoryLedger
from smartctx.domain.services.persona_registry import PersonaRegistry
from smartctx.domain.services.prompt_assembler import PromptAssembler
from smartctx.domain.services.protocols import (
    CommitHook,
    ReplyGenerator,
    SummarizeFn,
)
from smartctx.domain.services.summarization_coordinator import (
    SummarizationCoordinator,
)

__all__ = [
    "CommitHook",
    "ContextWindowManager",
    "ConversationState",
    "MemoryLedger",
    "PersonaRegistry",
    "PromptAssembler",
    "ReplyGenerator",
    "SummarizationCoordinator",
    "SummarizeFn",
]
