"""LLM integration."""

from smartctx.infrastructure.llm.client import LLMClient
from smartctx.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMEmptyResponseError,
    LLMError,
    LLMRateLimitError,
)
from smartctx.infrastructure.llm.reply_generator import LiteLLMReplyGenerator
from smartctx.infrastructure.llm.summarizer import LLMSummarizer

__all__ = [
    "LLMAuthenticationError",
    "LLMClient",
    "LLMEmptyResponseError",
    "LLMError",
    "LLMRateLimitError",
    "LLMSummarizer",
    "LiteLLMReplyGenerator",
]
