"""Persona repository protocol."""

from typing import Protocol

from smartctx.domain.entities.persona import Persona


class PersonaRepository(Protocol):
    """ペルソナリポジトリ"""

    async def save(self, persona: Persona) -> None:
        """ペルソナを保存（upsert）

        Args:
            persona: 保存するペルソナ
        """
        ...

    async def delete(self, persona_id: str) -> None:
        """ペルソナを削除（存在しない場合は何もしない）

        Args:
            persona_id: ペルソナ ID
        """
        ...

    async def find_all(self) -> list[Persona]:
        """全ペルソナを取得

        Returns:
            ペルソナのリスト
        """
        ...

    async def get_active_id(self) -> str | None:
        """有効なペルソナの ID を取得

        Returns:
            ペルソナ ID、または None
        """
        ...

    async def set_active_id(self, persona_id: str | None) -> None:
        """有効なペルソナの ID を保存

        Args:
            persona_id: ペルソナ ID（None で解除）
        """
        ...
