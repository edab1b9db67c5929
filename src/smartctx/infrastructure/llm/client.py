"""Async LiteLLM client."""

import logging
from typing import Any

import litellm
from litellm.exceptions import AuthenticationError, RateLimitError

from smartctx.config import LLMConfig
from smartctx.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMEmptyResponseError,
    LLMError,
    LLMRateLimitError,
)

logger = logging.getLogger(__name__)


class LLMClient:
    """Thin async wrapper over litellm.acompletion.

    Every request carries the configured model, temperature and max_tokens.
    Provider exceptions are re-raised as LLMError subclasses so callers only
    deal with one hierarchy.
    """

    def __init__(self, config: LLMConfig) -> None:
        self._config = config

    @property
    def model(self) -> str:
        return self._config.model

    async def complete(self, messages: list[dict[str, str]], **overrides: Any) -> str:
        """Run a chat completion and return the first choice's text.

        Args:
            messages: OpenAI-style message dicts.
            **overrides: Request parameters that replace the configured ones.

        Raises:
            LLMAuthenticationError: Provider rejected the credentials.
            LLMRateLimitError: Provider throttled the request.
            LLMEmptyResponseError: The completion had no text.
            LLMError: Any other failure.
        """
        request: dict[str, Any] = {
            "model": self._config.model,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
            "messages": messages,
        }
        request.update(overrides)
        logger.debug("LLM request: model=%s messages=%d", request["model"], len(messages))

        try:
            response = await litellm.acompletion(**request)
        except AuthenticationError as e:
            logger.error("LLM authentication failed: %s", e)
            raise LLMAuthenticationError(str(e)) from e
        except RateLimitError as e:
            logger.warning("LLM rate limited: %s", e)
            raise LLMRateLimitError(str(e)) from e
        except Exception as e:
            logger.error("LLM request failed: %s", e)
            raise LLMError(str(e)) from e

        text = response.choices[0].message.content
        if not text:
            raise LLMEmptyResponseError(f"Empty response from {request['model']}")
        return text

    async def chat(self, system_prompt: str, user_input: str, **overrides: Any) -> str:
        """Complete a single system + user exchange."""
        return await self.complete(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_input},
            ],
            **overrides,
        )
