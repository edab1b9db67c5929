"""Process-wide registry of user personas."""

import logging
import threading
from collections.abc import Iterable

from smartctx.domain.entities.persona import Persona
from smartctx.domain.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class PersonaRegistry:
    """Owns user personas and the optional active persona.

    Every mutation holds a single lock so the persona mapping and the active
    id always change together. The active id, when set, always refers to a
    registered persona.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._personas: dict[str, Persona] = {}
        self._active_persona_id: str | None = None

    def upsert(self, persona: Persona) -> None:
        """Insert or replace a persona by id.

        Args:
            persona: Persona to store. Name and description may be empty.

        Raises:
            ValueError: If the persona id is empty.
        """
        if not persona.id:
            raise ValueError("Persona id is required")
        with self._lock:
            self._personas[persona.id] = persona
        logger.debug("Upserted persona %s", persona.id)

    def delete(self, persona_id: str) -> None:
        """Remove a persona; unknown ids are ignored.

        Deleting the active persona clears the active reference.
        """
        with self._lock:
            if self._personas.pop(persona_id, None) is None:
                return
            if self._active_persona_id == persona_id:
                self._active_persona_id = None
                logger.info("Active persona %s deleted; cleared active persona", persona_id)

    def set_active(self, persona_id: str | None) -> None:
        """Set or clear the active persona.

        Args:
            persona_id: Persona to activate, or None to clear.

        Raises:
            NotFoundError: If persona_id is not registered.
        """
        with self._lock:
            if persona_id is not None and persona_id not in self._personas:
                raise NotFoundError(persona_id)
            self._active_persona_id = persona_id

    def get_active(self) -> Persona | None:
        with self._lock:
            if self._active_persona_id is None:
                return None
            return self._personas[self._active_persona_id]

    @property
    def active_persona_id(self) -> str | None:
        with self._lock:
            return self._active_persona_id

    def get(self, persona_id: str) -> Persona | None:
        with self._lock:
            return self._personas.get(persona_id)

    def list(self) -> list[Persona]:
        with self._lock:
            return list(self._personas.values())

    def load(self, personas: Iterable[Persona], active_persona_id: str | None) -> None:
        """Replace the whole registry, e.g. when restoring from storage.

        An active id that does not match a loaded persona is dropped.
        """
        loaded = {persona.id: persona for persona in personas}
        if active_persona_id is not None and active_persona_id not in loaded:
            logger.warning(
                "Stored active persona %s no longer exists; ignoring",
                active_persona_id,
            )
            active_persona_id = None
        with self._lock:
            self._personas = loaded
            self._active_persona_id = active_persona_id
