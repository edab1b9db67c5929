"""SQLite implementation of MessageRepository."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from smartctx.domain.entities.message import Message
from smartctx.infrastructure.persistence.converters import (
    message_to_entity,
    message_to_model,
)
from smartctx.infrastructure.persistence.models import MessageModel


class SQLiteMessageRepository:
    """SQLite によるメッセージリポジトリ実装

    メッセージは要約後も削除せず保持する。未要約部分は記憶エントリの
    source_range_end より後のメッセージとして復元される。
    """

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        """初期化

        Args:
            session_factory: 非同期セッション生成関数
        """
        self._session_factory = session_factory

    async def save(self, conversation_id: str, message: Message) -> None:
        """メッセージを保存

        Args:
            conversation_id: 会話 ID
            message: 保存するメッセージ
        """
        async with self._session_factory() as session:
            session.add(message_to_model(conversation_id, message))
            await session.commit()

    async def find_after(
        self,
        conversation_id: str,
        after_sequence: int | None = None,
    ) -> list[Message]:
        """指定 sequence より後のメッセージを sequence 昇順で取得

        Args:
            conversation_id: 会話 ID
            after_sequence: この値より大きい sequence のみ取得（None で全件）

        Returns:
            メッセージのリスト
        """
        async with self._session_factory() as session:
            stmt = select(MessageModel).where(
                MessageModel.conversation_id == conversation_id
            )
            if after_sequence is not None:
                stmt = stmt.where(MessageModel.sequence > after_sequence)
            stmt = stmt.order_by(MessageModel.sequence)
            result = await session.exec(stmt)
            return [message_to_entity(m) for m in result.all()]

    async def find_max_sequence(self, conversation_id: str) -> int | None:
        """会話で使用された最大の sequence を取得"""
        async with self._session_factory() as session:
            stmt = select(func.max(MessageModel.sequence)).where(
                MessageModel.conversation_id == conversation_id
            )
            result = await session.exec(stmt)
            return result.one()

    async def delete_by_conversation(self, conversation_id: str) -> None:
        """会話のメッセージを全て削除

        Args:
            conversation_id: 会話 ID
        """
        async with self._session_factory() as session:
            result = await session.exec(
                select(MessageModel).where(
                    MessageModel.conversation_id == conversation_id
                )
            )
            for model in result.all():
                await session.delete(model)
            await session.commit()
