"""Persisted persona management."""

import logging

from smartctx.config.models import DefaultPersonaConfig
from smartctx.domain.entities.persona import Persona
from smartctx.domain.exceptions import NotFoundError
from smartctx.domain.repositories.persona_repository import PersonaRepository
from smartctx.domain.services.persona_registry import PersonaRegistry

logger = logging.getLogger(__name__)


class PersonaService:
    """Applies persona CRUD to the registry and the persona store.

    The store is written first; the registry only changes once the write
    succeeded, so the in-memory state never runs ahead of storage.
    """

    def __init__(
        self,
        registry: PersonaRegistry,
        repository: PersonaRepository,
        default_persona: DefaultPersonaConfig | None = None,
    ) -> None:
        """Initialize PersonaService.

        Args:
            registry: Process-wide persona registry.
            repository: Persona store.
            default_persona: Persona created and activated when the store
                is empty.
        """
        self._registry = registry
        self._repository = repository
        self._default_persona = default_persona

    async def load(self) -> None:
        """Load personas and the active persona from the store."""
        personas = await self._repository.find_all()
        active_id = await self._repository.get_active_id()

        if not personas and self._default_persona is not None:
            persona = Persona(
                id=self._default_persona.id,
                name=self._default_persona.name,
                description=self._default_persona.description,
            )
            await self._repository.save(persona)
            await self._repository.set_active_id(persona.id)
            personas = [persona]
            active_id = persona.id
            logger.info("Created default persona %s", persona.id)

        self._registry.load(personas, active_id)
        logger.info("Loaded %d personas (active=%s)", len(personas), active_id)

    async def upsert(self, persona: Persona) -> None:
        """Create or update a persona.

        Raises:
            ValueError: If the persona id is empty.
        """
        if not persona.id:
            raise ValueError("Persona id is required")
        await self._repository.save(persona)
        self._registry.upsert(persona)

    async def delete(self, persona_id: str) -> None:
        """Delete a persona; deleting the active one clears it."""
        await self._repository.delete(persona_id)
        self._registry.delete(persona_id)

    async def set_active(self, persona_id: str | None) -> None:
        """Set or clear the active persona.

        Raises:
            NotFoundError: If persona_id is unknown.
        """
        if persona_id is not None and self._registry.get(persona_id) is None:
            raise NotFoundError(persona_id)
        await self._repository.set_active_id(persona_id)
        try:
            self._registry.set_active(persona_id)
        except NotFoundError:
            # Deleted while the store was being updated.
            await self._repository.set_active_id(None)
            raise

    def get_active(self) -> Persona | None:
        return self._registry.get_active()

    def list(self) -> list[Persona]:
        return self._registry.list()
