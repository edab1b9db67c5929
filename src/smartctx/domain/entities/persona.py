"""Persona entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Persona:
    """ユーザーペルソナ

    Attributes:
        id: ペルソナ ID
        name: 表示名（空文字可）
        description: プロンプトに挿入される説明（空文字可）
    """

    id: str
    name: str = ""
    description: str = ""
