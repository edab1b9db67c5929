"""Common fixtures."""

from collections.abc import Callable
from datetime import datetime, timezone

import pytest

from smartctx.config import ContextConfig
from smartctx.domain.entities import Message, Role


@pytest.fixture
def timestamp() -> datetime:
    """Create test timestamp."""
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_message(timestamp: datetime) -> Callable[..., Message]:
    """Create a factory for numbered messages.

    Odd sequences are user messages, even ones assistant messages, unless a
    role is given.
    """

    def _make(
        sequence: int, content: str | None = None, role: Role | None = None
    ) -> Message:
        if role is None:
            role = Role.USER if sequence % 2 == 1 else Role.ASSISTANT
        return Message(
            id=f"msg{sequence:03d}",
            role=role,
            content=content if content is not None else f"message {sequence}",
            sequence=sequence,
            created_at=timestamp,
        )

    return _make


@pytest.fixture
def small_config() -> ContextConfig:
    """Create a context config with depth 4 and chunk 2."""
    return ContextConfig(context_depth=4, summarization_chunk_size=2)
