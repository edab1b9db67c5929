"""YAML設定ファイルの読み込みと環境変数展開"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from smartctx.config.models import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CONTEXT_DEPTH,
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


class ConfigError(Exception):
    """設定関連の基底例外"""


class ConfigValidationError(ConfigError):
    """設定値のバリデーションエラー"""


class EnvironmentVariableError(ConfigError):
    """環境変数が見つからないエラー"""


# ${NAME} または ${NAME:-fallback}
ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")


def expand_env_vars(value: str) -> str:
    """${NAME} / ${NAME:-fallback} を環境変数の値で置き換える

    Args:
        value: 展開する文字列

    Returns:
        展開後の文字列

    Raises:
        EnvironmentVariableError: 未設定かつフォールバック指定なし
    """

    def substitute(match: re.Match[str]) -> str:
        name, fallback = match.group(1), match.group(2)
        resolved = os.environ.get(name, fallback)
        if resolved is None:
            raise EnvironmentVariableError(f"Environment variable '{name}' is not set")
        return resolved

    return ENV_VAR_PATTERN.sub(substitute, value) if value else value


def _expand_tree(node: Any) -> Any:
    """YAML から読んだ値を辿り、全ての文字列に expand_env_vars を適用する"""
    if isinstance(node, str):
        return expand_env_vars(node)
    if isinstance(node, list):
        return [_expand_tree(item) for item in node]
    if isinstance(node, dict):
        return {key: _expand_tree(item) for key, item in node.items()}
    return node


def _section(data: dict[str, Any], name: str, required: bool = False) -> dict[str, Any]:
    """トップレベルのセクションを dict として取り出す

    Raises:
        ConfigValidationError: 必須セクションがない、または dict でない
    """
    value = data.get(name)
    if value is None:
        if required:
            raise ConfigValidationError(f"Required field '{name}' is missing")
        return {}
    if not isinstance(value, dict):
        raise ConfigValidationError(f"Section '{name}' must be a mapping")
    return value


def _require(section: dict[str, Any], key: str, where: str) -> Any:
    """セクション内の必須キーを取り出す

    Args:
        section: 対象セクション
        key: キー名
        where: エラーメッセージ用のセクションパス

    Raises:
        ConfigValidationError: キーがない、または値が null
    """
    if section.get(key) is None:
        raise ConfigValidationError(f"Required field '{where}.{key}' is missing")
    return section[key]


def parse_context_config(context_data: dict[str, Any] | None) -> ContextConfig:
    """context セクションから ContextConfig を生成する

    UI のプリセットと同様、未指定の値は既定値で補う。

    Args:
        context_data: context セクションの dict（None 可）

    Returns:
        ContextConfig オブジェクト

    Raises:
        ConfigValidationError: 値が不正
    """
    context_data = context_data or {}
    mode_value = context_data.get("context_mode", ContextMode.STANDARD.value)
    try:
        mode = ContextMode(mode_value)
    except ValueError as e:
        raise ConfigValidationError(
            f"Invalid value for 'context.context_mode': {mode_value!r}"
        ) from e

    try:
        return ContextConfig(
            context_depth=int(
                context_data.get("context_depth", DEFAULT_CONTEXT_DEPTH)
            ),
            summarization_chunk_size=int(
                context_data.get("summarization_chunk_size", DEFAULT_CHUNK_SIZE)
            ),
            context_mode=mode,
            summarization_prompt=context_data.get("summarization_prompt")
            or DEFAULT_SUMMARIZATION_PROMPT,
        )
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(f"Invalid context config: {e}") from e


def _parse_llm(section: dict[str, Any]) -> dict[str, LLMConfig]:
    """llm セクション: 名前付きの LLM 設定。default は必須"""
    _require(section, "default", "llm")
    configs: dict[str, LLMConfig] = {}
    for name, item in section.items():
        if not isinstance(item, dict):
            raise ConfigValidationError(f"Section 'llm.{name}' must be a mapping")
        defaults = LLMConfig(model=_require(item, "model", f"llm.{name}"))
        configs[name] = LLMConfig(
            model=defaults.model,
            temperature=item.get("temperature", defaults.temperature),
            max_tokens=item.get("max_tokens", defaults.max_tokens),
        )
    return configs


def _parse_character(section: dict[str, Any]) -> CharacterConfig:
    defaults = CharacterConfig()
    return CharacterConfig(
        name=section.get("name", defaults.name),
        system_prompt=section.get("system_prompt", defaults.system_prompt),
    )


def _parse_default_persona(section: dict[str, Any]) -> DefaultPersonaConfig | None:
    if not section:
        return None
    return DefaultPersonaConfig(
        id=str(_require(section, "id", "default_persona")),
        name=section.get("name", ""),
        description=section.get("description", ""),
    )


def _parse_logging(section: dict[str, Any]) -> LoggingConfig | None:
    if not section:
        return None
    defaults = LoggingConfig()
    return LoggingConfig(
        level=section.get("level", defaults.level),
        format=section.get("format", defaults.format),
        loggers=section.get("loggers"),
        debug_llm_messages=bool(section.get("debug_llm_messages", False)),
    )


def load_config(path: str | Path) -> Config:
    """config.yaml を読み込んで Config を組み立てる

    llm.default と memory.database_path 以外は省略可能。

    Args:
        path: 設定ファイルのパス

    Returns:
        Config オブジェクト

    Raises:
        FileNotFoundError: ファイルが存在しない
        ConfigValidationError: 必須項目の欠落、または不正な値
        EnvironmentVariableError: 参照している環境変数が未設定
        yaml.YAMLError: YAML として読めない
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = _expand_tree(yaml.safe_load(path.read_text(encoding="utf-8")) or {})
    if not isinstance(data, dict):
        raise ConfigValidationError("Config root must be a mapping")

    memory_section = _section(data, "memory", required=True)

    return Config(
        llm=_parse_llm(_section(data, "llm", required=True)),
        memory=MemoryConfig(
            database_path=str(_require(memory_section, "database_path", "memory"))
        ),
        context=parse_context_config(_section(data, "context")),
        character=_parse_character(_section(data, "character")),
        default_persona=_parse_default_persona(_section(data, "default_persona")),
        logging=_parse_logging(_section(data, "logging")),
    )
