"""Tests for SQLitePersonaRepository."""

import pytest

from smartctx.domain.entities import Persona
from smartctx.infrastructure.persistence import DatabaseManager, SQLitePersonaRepository


@pytest.fixture
async def db_manager() -> DatabaseManager:
    """Create an in-memory database manager."""
    manager = DatabaseManager(":memory:")
    await manager.create_tables()
    return manager


@pytest.fixture
def repository(db_manager: DatabaseManager) -> SQLitePersonaRepository:
    """Create a repository instance."""
    return SQLitePersonaRepository(db_manager.get_session)


class TestSQLitePersonaRepositorySave:
    """Tests for save and find_all methods."""

    async def test_save_new_persona(self, repository: SQLitePersonaRepository) -> None:
        """Test saving a new persona."""
        persona = Persona(id="p1", name="Alice", description="A knight.")

        await repository.save(persona)

        assert await repository.find_all() == [persona]

    async def test_save_updates_existing(
        self, repository: SQLitePersonaRepository
    ) -> None:
        """Test that saving the same id updates in place."""
        await repository.save(Persona(id="p1", name="Alice"))
        await repository.save(Persona(id="p1", name="Alicia", description="Older."))

        assert await repository.find_all() == [
            Persona(id="p1", name="Alicia", description="Older.")
        ]

    async def test_find_all_in_insertion_order(
        self, repository: SQLitePersonaRepository
    ) -> None:
        """Test that personas come back in the order they were created."""
        for persona_id in ("b", "a", "c"):
            await repository.save(Persona(id=persona_id))

        assert [p.id for p in await repository.find_all()] == ["b", "a", "c"]


class TestSQLitePersonaRepositoryActive:
    """Tests for active persona id and delete."""

    async def test_active_id_defaults_to_none(
        self, repository: SQLitePersonaRepository
    ) -> None:
        """Test reading the active id before it was set."""
        assert await repository.get_active_id() is None

    async def test_set_and_clear_active_id(
        self, repository: SQLitePersonaRepository
    ) -> None:
        """Test storing and clearing the active id."""
        await repository.set_active_id("p1")
        assert await repository.get_active_id() == "p1"

        await repository.set_active_id("p2")
        assert await repository.get_active_id() == "p2"

        await repository.set_active_id(None)
        assert await repository.get_active_id() is None

    async def test_delete_active_clears_active_id(
        self, repository: SQLitePersonaRepository
    ) -> None:
        """Test that deleting the active persona clears the stored id."""
        await repository.save(Persona(id="p1"))
        await repository.set_active_id("p1")

        await repository.delete("p1")

        assert await repository.find_all() == []
        assert await repository.get_active_id() is None

    async def test_delete_other_keeps_active_id(
        self, repository: SQLitePersonaRepository
    ) -> None:
        """Test that deleting another persona keeps the stored id."""
        await repository.save(Persona(id="p1"))
        await repository.save(Persona(id="p2"))
        await repository.set_active_id("p1")

        await repository.delete("p2")

        assert await repository.get_active_id() == "p1"

    async def test_delete_unknown_is_noop(
        self, repository: SQLitePersonaRepository
    ) -> None:
        """Test deleting an id that does not exist."""
        await repository.delete("missing")

        assert await repository.find_all() == []
