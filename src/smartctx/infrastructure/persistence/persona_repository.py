"""SQLite implementation of PersonaRepository."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timezone

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from smartctx.domain.entities.persona import Persona
from smartctx.infrastructure.persistence.converters import persona_to_entity
from smartctx.infrastructure.persistence.models import PersonaModel, SettingModel

ACTIVE_PERSONA_KEY = "active_persona_id"


class SQLitePersonaRepository:
    """SQLite によるペルソナリポジトリ実装

    ペルソナ本体は personas テーブル、有効ペルソナ ID は settings テーブルに
    キー ACTIVE_PERSONA_KEY で保存する。
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

    async def save(self, persona: Persona) -> None:
        """ペルソナを保存（upsert）

        Args:
            persona: 保存するペルソナ
        """
        async with self._session_factory() as session:
            result = await session.exec(
                select(PersonaModel).where(PersonaModel.persona_id == persona.id)
            )
            existing = result.first()

            if existing:
                existing.name = persona.name
                existing.description = persona.description
                existing.updated_at = datetime.now(timezone.utc)
                session.add(existing)
            else:
                session.add(
                    PersonaModel(
                        persona_id=persona.id,
                        name=persona.name,
                        description=persona.description,
                    )
                )

            await session.commit()

    async def delete(self, persona_id: str) -> None:
        """ペルソナを削除する

        有効ペルソナだった場合は有効ペルソナ ID も解除する。

        Args:
            persona_id: ペルソナ ID
        """
        async with self._session_factory() as session:
            result = await session.exec(
                select(PersonaModel).where(PersonaModel.persona_id == persona_id)
            )
            model = result.first()
            if model is None:
                return
            await session.delete(model)

            setting = await session.get(SettingModel, ACTIVE_PERSONA_KEY)
            if setting is not None and setting.value == persona_id:
                setting.value = None
                setting.updated_at = datetime.now(timezone.utc)
                session.add(setting)

            await session.commit()

    async def find_all(self) -> list[Persona]:
        """全ペルソナを取得

        Returns:
            ペルソナのリスト（登録順）
        """
        async with self._session_factory() as session:
            result = await session.exec(select(PersonaModel).order_by(PersonaModel.id))
            return [persona_to_entity(m) for m in result.all()]

    async def get_active_id(self) -> str | None:
        """有効なペルソナの ID を取得"""
        async with self._session_factory() as session:
            setting = await session.get(SettingModel, ACTIVE_PERSONA_KEY)
            return setting.value if setting else None

    async def set_active_id(self, persona_id: str | None) -> None:
        """有効なペルソナの ID を保存

        Args:
            persona_id: ペルソナ ID（None で解除）
        """
        async with self._session_factory() as session:
            setting = await session.get(SettingModel, ACTIVE_PERSONA_KEY)
            if setting is None:
                setting = SettingModel(key=ACTIVE_PERSONA_KEY)
            setting.value = persona_id
            setting.updated_at = datetime.now(timezone.utc)
            session.add(setting)
            await session.commit()
