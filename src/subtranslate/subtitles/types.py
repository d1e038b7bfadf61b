from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SubtitleEntry:
    """
    从 SRT 中切分出的单条字幕块。

    index / time_code 均保留原始行内容；text 为各正文行加换行符后拼接的结果。
    """

    index: str
    time_code: str
    text: str


@dataclass
class TranslatedEntry:
    index: str
    time_code: str
    source_text: str
    translated_text: str

    @classmethod
    def from_entry(cls, entry: SubtitleEntry, translated_text: str) -> "TranslatedEntry":
        return cls(
            index=entry.index,
            time_code=entry.time_code,
            source_text=entry.text,
            translated_text=translated_text,
        )
