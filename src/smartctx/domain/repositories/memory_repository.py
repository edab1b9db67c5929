"""Memory repository protocol."""

from typing import Protocol

from smartctx.domain.entities.memory import MemoryEntry


class MemoryRepository(Protocol):
    """記憶リポジトリ"""

    async def append(self, conversation_id: str, entry: MemoryEntry) -> None:
        """記憶エントリを追加

        Args:
            conversation_id: 会話 ID
            entry: 追加する記憶エントリ
        """
        ...

    async def find_all(self, conversation_id: str) -> list[MemoryEntry]:
        """会話の記憶エントリを source_range_end 昇順で取得

        Args:
            conversation_id: 会話 ID

        Returns:
            記憶エントリのリスト
        """
        ...

    async def delete_by_conversation(self, conversation_id: str) -> None:
        """会話の記憶エントリを全て削除

        Args:
            conversation_id: 会話 ID
        """
        ...
