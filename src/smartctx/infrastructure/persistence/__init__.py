"""Persistence infrastructure."""

from smartctx.infrastructure.persistence.database import (
    DatabaseError,
    DatabaseManager,
    PersistenceError,
)
from smartctx.infrastructure.persistence.memory_repository import (
    SQLiteMemoryRepository,
)
from smartctx.infrastructure.persistence.message_repository import (
    SQLiteMessageRepository,
)
from smartctx.infrastructure.persistence.models import (
    MemoryEntryModel,
    MessageModel,
    PersonaModel,
    SettingModel,
)
from smartctx.infrastructure.persistence.persona_repository import (
    SQLitePersonaRepository,
)

__all__ = [
    "DatabaseError",
    "DatabaseManager",
    "MemoryEntryModel",
    "MessageModel",
    "PersistenceError",
    "PersonaModel",
    "SQLiteMemoryRepository",
    "SQLiteMessageRepository",
    "SQLitePersonaRepository",
    "SettingModel",
]
