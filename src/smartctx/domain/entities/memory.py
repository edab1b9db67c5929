"""Memory entry entity for long-term memory."""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class MemoryEntry:
    """記憶エントリ

    連続したメッセージ範囲（sequence の閉区間）を要約したもの。

    Attributes:
        source_range_start: 要約元の最初のメッセージの sequence
        source_range_end: 要約元の最後のメッセージの sequence
        summary_text: 要約テキスト（LLM 生成）
        created_at: 作成日時
    """

    source_range_start: int
    source_range_end: int
    summary_text: str
    created_at: datetime

    def __post_init__(self) -> None:
        """バリデーション"""
        if self.source_range_start > self.source_range_end:
            raise ValueError(
                f"Invalid source range: {self.source_range_start}"
                f"-{self.source_range_end}"
            )


def create_memory_entry(
    source_range_start: int,
    source_range_end: int,
    summary_text: str,
) -> MemoryEntry:
    """MemoryEntry を現在時刻で生成する

    Args:
        source_range_start: 要約元の最初の sequence
        source_range_end: 要約元の最後の sequence
        summary_text: 要約テキスト

    Returns:
        MemoryEntry エンティティ

    Raises:
        ValueError: 範囲が不正な場合
    """
    return MemoryEntry(
        source_range_start=source_range_start,
        source_range_end=source_range_end,
        summary_text=summary_text,
        created_at=datetime.now(timezone.utc),
    )
