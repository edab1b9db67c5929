"""Application services."""

from smartctx.application.services.memory_engine import ConversationMemoryEngine
from smartctx.application.services.persona_service import PersonaService

__all__ = ["ConversationMemoryEngine", "PersonaService"]
