"""Domain repositories."""

from smartctx.domain.repositories.memory_repository import MemoryRepository
from smartctx.domain.repositories.message_repository import MessageRepository
from smartctx.domain.repositories.persona_repository import PersonaRepository

__all__ = [
    "MemoryRepository",
    "MessageRepository",
    "PersonaRepository",
]
