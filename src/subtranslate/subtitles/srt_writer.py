from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .types import TranslatedEntry


def format_translated_entry(entry: TranslatedEntry) -> str:
    """
    单条双语字幕块：序号、时间轴、原文、译文各占一行（原文与译文去除首尾空白）。
    """
    lines = [
        entry.index,
        entry.time_code,
        entry.source_text.strip(),
        entry.translated_text.strip(),
    ]
    return "\n".join(lines)


def translated_entries_to_srt(entries: Iterable[TranslatedEntry]) -> str:
    # 块之间以一个空行分隔，最后一块之后不追加空行
    return "\n\n".join(format_translated_entry(entry) for entry in entries)


def write_srt_text(srt_text: str, path: str | Path) -> Path:
    out_path = Path(path).expanduser().resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(srt_text, encoding="utf-8")
    return out_path
