"""Message entity."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Role(Enum):
    """Speaker role of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """Message entity.

    Attributes:
        id: Message ID.
        role: Who sent the message.
        content: Message content.
        sequence: Position in the conversation, strictly increasing.
        created_at: When the message was created.
    """

    id: str
    role: Role
    content: str
    sequence: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_from_user(self) -> bool:
        """Check if the message was written by the user.

        Returns:
            True if the role is USER.
        """
        return self.role == Role.USER


def create_message(role: Role, content: str, sequence: int) -> Message:
    """Create a Message with a generated ID.

    Args:
        role: Speaker role.
        content: Message content.
        sequence: Sequence number assigned by the conversation.

    Returns:
        Message entity.
    """
    return Message(
        id=str(uuid.uuid4()),
        role=role,
        content=content,
        sequence=sequence,
    )
