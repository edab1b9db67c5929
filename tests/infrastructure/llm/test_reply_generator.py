"""Tests for LiteLLMReplyGenerator."""

import logging
from unittest.mock import AsyncMock, Mock

import pytest

from smartctx.config import CharacterConfig
from smartctx.infrastructure.llm import LiteLLMReplyGenerator


@pytest.fixture
def character() -> CharacterConfig:
    """Create test character config."""
    return CharacterConfig(name="Aria", system_prompt="You are a cheerful bard.")


@pytest.fixture
def mock_client() -> Mock:
    """Create mock LLMClient."""
    client = Mock()
    client.chat = AsyncMock(return_value="Well met, traveler!\n")
    return client


class TestLiteLLMReplyGenerator:
    """LiteLLMReplyGenerator tests."""

    def test_build_system_prompt(
        self, mock_client: Mock, character: CharacterConfig
    ) -> None:
        """Test that character prompt and context are rendered."""
        generator = LiteLLMReplyGenerator(mock_client, character)

        result = generator.build_system_prompt("[Recent History]\nUser: hi")

        assert result.startswith("You are a cheerful bard.")
        assert "You are Aria." in result
        assert result.rstrip().endswith("[Recent History]\nUser: hi")

    def test_build_system_prompt_without_context(self, mock_client: Mock) -> None:
        """Test rendering with an empty context and no character prompt."""
        generator = LiteLLMReplyGenerator(mock_client, CharacterConfig())

        result = generator.build_system_prompt("")

        assert result.strip() == (
            "You are Assistant. Stay in character and continue the story."
        )

    async def test_generate(self, mock_client: Mock, character: CharacterConfig) -> None:
        """Test that the reply is generated from the context and user input."""
        generator = LiteLLMReplyGenerator(mock_client, character)

        result = await generator.generate(
            context="[Recent History]\nUser: hi", user_input="Hello!"
        )

        assert result == "Well met, traveler!"
        system_prompt, user_input = mock_client.chat.await_args.args
        assert system_prompt.startswith("You are a cheerful bard.")
        assert "[Recent History]" in system_prompt
        assert user_input == "Hello!"

    async def test_debug_llm_messages(
        self,
        mock_client: Mock,
        character: CharacterConfig,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that the request is logged when debugging is on."""
        generator = LiteLLMReplyGenerator(
            mock_client, character, debug_llm_messages=True
        )

        with caplog.at_level(logging.INFO):
            await generator.generate("context", "Hello!")

        assert "LLM messages" in caplog.text
