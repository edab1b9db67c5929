"""LiteLLM-based reply generator."""

import logging

from smartctx.config import CharacterConfig
from smartctx.infrastructure.llm.client import LLMClient
from smartctx.infrastructure.llm.templates import create_jinja_env

logger = logging.getLogger(__name__)


class LiteLLMReplyGenerator:
    """Generates the character's reply from an assembled prompt."""

    def __init__(
        self,
        client: LLMClient,
        character: CharacterConfig,
        debug_llm_messages: bool = False,
    ) -> None:
        """Initialize the generator.

        Args:
            client: LLM client for text generation.
            character: Character name and base system prompt.
            debug_llm_messages: Log the full request at INFO level.
        """
        self._client = client
        self._character = character
        self._debug_llm_messages = debug_llm_messages
        self._template = create_jinja_env().get_template("reply_system.j2")

    def build_system_prompt(self, context: str) -> str:
        """Render the system prompt around the assembled context.

        Args:
            context: Output of PromptAssembler.build().

        Returns:
            System prompt text.
        """
        return self._template.render(
            character_name=self._character.name,
            character_prompt=self._character.system_prompt,
            context=context,
        )

    async def generate(self, context: str, user_input: str) -> str:
        """Generate a reply.

        Args:
            context: Assembled context (persona, memory, history).
            user_input: Latest user message.

        Returns:
            Reply text.
        """
        rendered = self.build_system_prompt(context)
        if self._debug_llm_messages:
            logger.info("LLM messages: system=%r user=%r", rendered, user_input)
        response = await self._client.chat(rendered, user_input)
        return response.strip()
