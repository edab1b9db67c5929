"""Model-facing prompt assembly."""

from smartctx.config.models import ContextMode
from smartctx.domain.entities.message import Message, Role
from smartctx.domain.entities.persona import Persona
from smartctx.domain.services.conversation import ConversationState
from smartctx.domain.services.message_formatter import replace_history_macros

PERSONA_HEADER = "[User Persona]"
MEMORY_HEADER = "[Long-term Memory]"
HISTORY_HEADER = "[Recent History]"
MEMORY_DIVIDER = "\n\n---\n\n"

DEFAULT_USER_LABEL = "User"


class PromptAssembler:
    """Composes persona, long-term memory and the live window.

    Output depends only on the arguments: the same state and persona always
    produce the same text. Empty sections are left out.
    """

    def __init__(self, character_name: str = "Assistant") -> None:
        """Initialize the assembler.

        Args:
            character_name: Label for assistant lines and the {{char}} macro.
        """
        self._character_name = character_name

    def build(self, state: ConversationState, active_persona: Persona | None) -> str:
        """Build the prompt for a conversation.

        Sections, in order:
        1. the active persona's description,
        2. every memory entry summary in ledger order,
        3. the live window filtered by context_mode. In ai_only mode user
           messages are omitted from the rendering but stay in the window.

        Args:
            state: Conversation to render.
            active_persona: Active persona, if any.

        Returns:
            Assembled prompt text.
        """
        with state.lock:
            entries = state.ledger.entries()
            messages = state.window.window()
            mode = state.config.context_mode

        user_label = (
            active_persona.name
            if active_persona is not None and active_persona.name
            else DEFAULT_USER_LABEL
        )

        sections: list[str] = []

        if active_persona is not None and active_persona.description.strip():
            sections.append(f"{PERSONA_HEADER}\n{active_persona.description.strip()}")

        if entries:
            memory = MEMORY_DIVIDER.join(entry.summary_text for entry in entries)
            sections.append(f"{MEMORY_HEADER}\n{memory}")

        history = [
            self._format_line(msg, user_label)
            for msg in self._filter_messages(messages, mode)
        ]
        if history:
            sections.append(HISTORY_HEADER + "\n" + "\n".join(history))

        return "\n\n".join(sections)

    def _filter_messages(
        self, messages: tuple[Message, ...], mode: ContextMode
    ) -> list[Message]:
        if mode == ContextMode.AI_ONLY:
            return [msg for msg in messages if msg.role == Role.ASSISTANT]
        return list(messages)

    def _format_line(self, message: Message, user_label: str) -> str:
        label = user_label if message.is_from_user() else self._character_name
        content = replace_history_macros(
            message.content, user_label, self._character_name
        )
        return f"{label}: {content}"
