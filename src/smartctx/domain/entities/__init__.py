"""Domain entities."""

from smartctx.domain.entities.memory import MemoryEntry, create_memory_entry
from smartctx.domain.entities.message import Message, Role, create_message
from smartctx.domain.entities.persona import Persona
from smartctx.domain.entities.trigger import SummarizationOutcome, TriggerDecision

__all__ = [
    "MemoryEntry",
    "Message",
    "Persona",
    "Role",
    "SummarizationOutcome",
    "TriggerDecision",
    "create_memory_entry",
    "create_message",
]
