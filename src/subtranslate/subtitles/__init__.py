from __future__ import annotations

from .types import SubtitleEntry, TranslatedEntry
from .srt_reader import iter_entries, read_entries
from .srt_writer import format_translated_entry, translated_entries_to_srt, write_srt_text

__all__ = [
    "SubtitleEntry",
    "TranslatedEntry",
    "iter_entries",
    "read_entries",
    "format_translated_entry",
    "translated_entries_to_srt",
    "write_srt_text",
]
