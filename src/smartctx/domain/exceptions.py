"""Domain exceptions."""


class MemoryEngineError(Exception):
    """Base exception for conversation memory errors."""


class OutOfOrderError(MemoryEngineError):
    """メッセージの sequence が直前のメッセージ以下の場合に発生する例外

    呼び出し側のバグを示す。会話の状態は変更されない。
    """

    def __init__(self, sequence: int, last_sequence: int) -> None:
        """初期化

        Args:
            sequence: 追加しようとしたメッセージの sequence
            last_sequence: 直前に追加されたメッセージの sequence
        """
        self.sequence = sequence
        self.last_sequence = last_sequence
        super().__init__(
            f"Message sequence {sequence} is not greater than "
            f"last appended sequence {last_sequence}"
        )


class NotFoundError(MemoryEngineError):
    """存在しないペルソナを有効化しようとした場合に発生する例外"""

    def __init__(self, persona_id: str) -> None:
        self.persona_id = persona_id
        super().__init__(f"Persona {persona_id} not found")


class ConversationNotFoundError(MemoryEngineError):
    """Raised when an unknown conversation is addressed."""

    def __init__(self, conversation_id: str) -> None:
        self.conversation_id = conversation_id
        super().__init__(f"Conversation {conversation_id} not found")


class InvariantError(MemoryEngineError):
    """Ledger/window desynchronisation.

    Fatal to the current unit of work, which is rolled back, but never to
    the process.
    """


class SummarizationFailure(MemoryEngineError):
    """External summarization call failed, was cancelled or returned nothing.

    Recovered locally: the live window is kept and the next trigger retries.
    """

    def __init__(self, conversation_id: str, reason: str) -> None:
        self.conversation_id = conversation_id
        self.reason = reason
        super().__init__(
            f"Summarization failed for conversation {conversation_id}: {reason}"
        )
