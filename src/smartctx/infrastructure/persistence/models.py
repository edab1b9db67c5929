"""SQLModel table definitions."""

from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class PersonaModel(SQLModel, table=True):
    """ペルソナテーブル"""

    __tablename__ = "personas"

    id: int | None = Field(default=None, primary_key=True)
    persona_id: str = Field(unique=True, index=True)
    name: str = ""
    description: str = ""
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SettingModel(SQLModel, table=True):
    """キー・バリュー設定テーブル（有効ペルソナ ID など）"""

    __tablename__ = "settings"

    key: str = Field(primary_key=True)
    value: str | None = None
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class MessageModel(SQLModel, table=True):
    """メッセージテーブル"""

    __tablename__ = "messages"

    id: int | None = Field(default=None, primary_key=True)
    message_id: str = Field(index=True)
    conversation_id: str = Field(index=True)
    role: str
    content: str
    sequence: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("conversation_id", "sequence", name="uq_conversation_sequence"),
    )


class MemoryEntryModel(SQLModel, table=True):
    """記憶エントリテーブル"""

    __tablename__ = "memory_entries"

    id: int | None = Field(default=None, primary_key=True)
    conversation_id: str = Field(index=True)
    source_range_start: int
    source_range_end: int
    summary_text: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint(
            "conversation_id", "source_range_end", name="uq_conversation_range_end"
        ),
    )
