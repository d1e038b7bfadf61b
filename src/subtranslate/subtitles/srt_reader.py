from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Iterator

from .types import SubtitleEntry

TIME_CODE_SEPARATOR = "-->"
# 序号行按 32 位无符号整数解析
MAX_INDEX_VALUE = 0xFFFFFFFF

_INDEX_PATTERN = re.compile(r"\+?[0-9]+")


def _is_index_line(line: str) -> bool:
    if not _INDEX_PATTERN.fullmatch(line):
        return False
    return int(line) <= MAX_INDEX_VALUE


def iter_entries(lines: Iterable[str]) -> Iterator[SubtitleEntry]:
    """
    将按行输入的字幕流切分为 SubtitleEntry。

    规则：
      - 空行（或仅含空白）结束当前字幕块；连续空行被忽略；
      - 整行可解析为非负整数时视为序号行；
      - 含有 "-->" 的行视为时间轴行；
      - 其余行均视为正文，按原顺序追加（每行后补一个换行符）。

    每遇到块边界只重置正文，序号与时间轴会沿用到下一块，
    因此缺少序号/时间轴的畸形输入会复用上一条的值。
    文件末尾没有空行时，最后一块同样会被输出。
    """
    current_text = ""
    current_index = ""
    current_time_code = ""

    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if not line.strip():
            if current_text:
                yield SubtitleEntry(
                    index=current_index,
                    time_code=current_time_code,
                    text=current_text,
                )
                current_text = ""
        elif _is_index_line(line):
            current_index = line
        elif TIME_CODE_SEPARATOR in line:
            current_time_code = line
        else:
            current_text += line + "\n"

    if current_text:
        yield SubtitleEntry(
            index=current_index,
            time_code=current_time_code,
            text=current_text,
        )


def read_entries(path: str | Path) -> Iterator[SubtitleEntry]:
    """
    逐行读取 SRT 文件并惰性产出字幕块，读取完毕后关闭文件。
    """
    srt_path = Path(path).expanduser()
    # utf-8-sig：忽略部分编辑器写入的 BOM，避免首个序号行被当作正文
    with srt_path.open("r", encoding="utf-8-sig") as f:
        yield from iter_entries(f)
