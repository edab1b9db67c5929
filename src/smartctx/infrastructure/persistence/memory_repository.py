"""SQLite implementation of MemoryRepository."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from smartctx.domain.entities.memory import MemoryEntry
from smartctx.infrastructure.persistence.converters import (
    memory_entry_to_entity,
    memory_entry_to_model,
)
from smartctx.infrastructure.persistence.models import MemoryEntryModel


class SQLiteMemoryRepository:
    """SQLite による記憶リポジトリ実装"""

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        """初期化

        Args:
            session_factory: 非同期セッション生成関数
        """
        self._session_factory = session_factory

    async def append(self, conversation_id: str, entry: MemoryEntry) -> None:
        """記憶エントリを追加

        Args:
            conversation_id: 会話 ID
            entry: 追加する記憶エントリ
        """
        async with self._session_factory() as session:
            session.add(memory_entry_to_model(conversation_id, entry))
            await session.commit()

    async def find_all(self, conversation_id: str) -> list[MemoryEntry]:
        """会話の記憶エントリを source_range_end 昇順で取得

        Args:
            conversation_id: 会話 ID

        Returns:
            記憶エントリのリスト
        """
        async with self._session_factory() as session:
            stmt = (
                select(MemoryEntryModel)
                .where(MemoryEntryModel.conversation_id == conversation_id)
                .order_by(MemoryEntryModel.source_range_end)
            )
            result = await session.exec(stmt)
            return [memory_entry_to_entity(m) for m in result.all()]

    async def delete_by_conversation(self, conversation_id: str) -> None:
        """会話の記憶エントリを全て削除

        Args:
            conversation_id: 会話 ID
        """
        async with self._session_factory() as session:
            result = await session.exec(
                select(MemoryEntryModel).where(
                    MemoryEntryModel.conversation_id == conversation_id
                )
            )
            for model in result.all():
                await session.delete(model)
            await session.commit()
