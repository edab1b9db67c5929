"""Conversions between table models and domain entities."""

from datetime import datetime, timezone

from smartctx.domain.entities.memory import MemoryEntry
from smartctx.domain.entities.message import Message, Role
from smartctx.domain.entities.persona import Persona
from smartctx.infrastructure.persistence.models import (
    MemoryEntryModel,
    MessageModel,
    PersonaModel,
)


def normalize_to_utc(dt: datetime) -> datetime:
    """Return dt as a timezone-aware UTC datetime.

    SQLite drops tzinfo on the way in, so naive values read back are UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def persona_to_entity(model: PersonaModel) -> Persona:
    return Persona(id=model.persona_id, name=model.name, description=model.description)


def message_to_model(conversation_id: str, message: Message) -> MessageModel:
    return MessageModel(
        message_id=message.id,
        conversation_id=conversation_id,
        role=message.role.value,
        content=message.content,
        sequence=message.sequence,
        created_at=message.created_at,
    )


def message_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.message_id,
        role=Role(model.role),
        content=model.content,
        sequence=model.sequence,
        created_at=normalize_to_utc(model.created_at),
    )


def memory_entry_to_model(conversation_id: str, entry: MemoryEntry) -> MemoryEntryModel:
    return MemoryEntryModel(
        conversation_id=conversation_id,
        source_range_start=entry.source_range_start,
        source_range_end=entry.source_range_end,
        summary_text=entry.summary_text,
        created_at=entry.created_at,
    )


def memory_entry_to_entity(model: MemoryEntryModel) -> MemoryEntry:
    return MemoryEntry(
        source_range_start=model.source_range_start,
        source_range_end=model.source_range_end,
        summary_text=model.summary_text,
        created_at=normalize_to_utc(model.created_at),
    )
