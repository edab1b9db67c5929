"""設定データクラス"""

from dataclasses import dataclass, field
from enum import Enum

CHAT_HISTORY_SLICE_PLACEHOLDER = "{{chat_history_slice}}"

DEFAULT_CONTEXT_DEPTH = 20
DEFAULT_CHUNK_SIZE = 10

DEFAULT_SUMMARIZATION_PROMPT = (
    "Summarize the following part of a role-play conversation into a concise "
    "long-term memory. Keep names, relationships, promises, locations and "
    "unresolved plot threads. Write in the past tense and do not invent facts.\n\n"
    "Conversation:\n"
    f"{CHAT_HISTORY_SLICE_PLACEHOLDER}"
)


class ContextMode(Enum):
    """履歴の組み立てモード"""

    STANDARD = "standard"
    AI_ONLY = "ai_only"


@dataclass(frozen=True)
class ContextConfig:
    """会話記憶設定

    Attributes:
        context_depth: 要約をトリガーする未要約メッセージ数
        summarization_chunk_size: 1回の要約で切り出す最古メッセージ数
        context_mode: 履歴に含める話者のフィルタ
        summarization_prompt: {{chat_history_slice}} を含む要約プロンプト
    """

    context_depth: int = DEFAULT_CONTEXT_DEPTH
    summarization_chunk_size: int = DEFAULT_CHUNK_SIZE
    context_mode: ContextMode = ContextMode.STANDARD
    summarization_prompt: str = DEFAULT_SUMMARIZATION_PROMPT

    def __post_init__(self) -> None:
        """バリデーション"""
        if self.context_depth < 1:
            raise ValueError(
                f"context_depth must be >= 1, got {self.context_depth}"
            )
        if not 1 <= self.summarization_chunk_size <= self.context_depth:
            raise ValueError(
                "summarization_chunk_size must be between 1 and context_depth "
                f"({self.context_depth}), got {self.summarization_chunk_size}"
            )
        if not isinstance(self.context_mode, ContextMode):
            raise ValueError(f"Invalid context_mode: {self.context_mode!r}")
        if CHAT_HISTORY_SLICE_PLACEHOLDER not in self.summarization_prompt:
            raise ValueError(
                "summarization_prompt must contain "
                f"{CHAT_HISTORY_SLICE_PLACEHOLDER}"
            )


@dataclass
class LLMConfig:
    """LLM設定（LiteLLMのcompletionに渡すdict）"""

    model: str
    temperature: float = 0.7
    max_tokens: int = 1000


@dataclass
class CharacterConfig:
    """キャラクター設定"""

    name: str = "Assistant"
    system_prompt: str = ""


@dataclass
class DefaultPersonaConfig:
    """初回起動時に作成するユーザーペルソナ"""

    id: str
    name: str
    description: str = ""


@dataclass
class MemoryConfig:
    """記憶ストア設定"""

    database_path: str


@dataclass
class LoggingConfig:
    """ログ設定"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None
    debug_llm_messages: bool = False


@dataclass
class Config:
    """アプリケーション設定"""

    llm: dict[str, LLMConfig]
    memory: MemoryConfig
    context: ContextConfig = field(default_factory=ContextConfig)
    character: CharacterConfig = field(default_factory=CharacterConfig)
    default_persona: DefaultPersonaConfig | None = None
    logging: LoggingConfig | None = None
