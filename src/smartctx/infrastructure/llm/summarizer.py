"""LLM-based summarize function."""

import logging

from smartctx.infrastructure.llm.client import LLMClient
from smartctx.infrastructure.llm.templates import create_jinja_env

logger = logging.getLogger(__name__)


class LLMSummarizer:
    """Summarizer backed by an LLM, usable as a SummarizeFn.

    The summarization prompt built by the coordinator is sent as the user
    message; the system prompt comes from summarizer_system.j2. Errors from
    the client propagate so the coordinator can count the attempt as failed.
    """

    def __init__(
        self,
        client: LLMClient,
        character_name: str = "Assistant",
        max_words: int | None = None,
    ) -> None:
        """Initialize the summarizer.

        Args:
            client: LLM client for text generation.
            character_name: Character whose memory is being written.
            max_words: Optional length hint for the summary.
        """
        self._client = client
        self._template = create_jinja_env().get_template("summarizer_system.j2")
        self._system_prompt = self._template.render(
            character_name=character_name,
            max_words=max_words,
        )

    async def __call__(self, prompt: str) -> str:
        """Summarize a chat history slice.

        Args:
            prompt: Summarization prompt with the slice already inserted.

        Returns:
            Summary text, stripped.
        """
        response = await self._client.chat(self._system_prompt, prompt)
        logger.debug("Summary generated (%d chars)", len(response))
        return response.strip()
