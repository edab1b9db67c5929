"""設定管理モジュール"""

from smartctx.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
    parse_context_config,
)
from smartctx.config.models import (
    CHAT_HISTORY_SLICE_PLACEHOLDER,
    DEFAULT_SUMMARIZATION_PROMPT,
    CharacterConfig,
    Config,
    ContextConfig,
    ContextMode,
    DefaultPersonaConfig,
    LLMConfig,
    LoggingConfig,
    MemoryConfig,
)

__all__ = [
    "CHAT_HISTORY_SLICE_PLACEHOLDER",
    "CharacterConfig",
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "ContextConfig",
    "ContextMode",
    "DEFAULT_SUMMARIZATION_PROMPT",
    "DefaultPersonaConfig",
    "EnvironmentVariableError",
    "LLMConfig",
    "LoggingConfig",
    "MemoryConfig",
    "expand_env_vars",
    "load_config",
    "parse_context_config",
]
