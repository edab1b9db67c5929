"""Message repository protocol."""

from typing import Protocol

from smartctx.domain.entities.message import Message


class MessageRepository(Protocol):
    """メッセージリポジトリ"""

    async def save(self, conversation_id: str, message: Message) -> None:
        """メッセージを保存

        Args:
            conversation_id: 会話 ID
            message: 保存するメッセージ
        """
        ...

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
        ...

    async def find_max_sequence(self, conversation_id: str) -> int | None:
        """会話で使用された最大の sequence を取得

        Args:
            conversation_id: 会話 ID

        Returns:
            最大 sequence、またはメッセージがない場合 None
        """
        ...

    async def delete_by_conversation(self, conversation_id: str) -> None:
        """会話のメッセージを全て削除

        Args:
            conversation_id: 会話 ID
        """
        ...
