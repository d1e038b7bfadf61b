from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import time
from typing import Callable, Iterable, List, Tuple, Union

from .config import SubTranslateConfig
from .subtitles import (
    SubtitleEntry,
    TranslatedEntry,
    read_entries,
    translated_entries_to_srt,
    write_srt_text,
)
from .translate import LLMTranslator, TranslationResult

TranslateFn = Callable[[str], Union[TranslationResult, Tuple[str, int]]]


@dataclass
class PipelineResult:
    output_path: Path
    entry_count: int
    total_cost: int


def translate_entries(
    entries: Iterable[SubtitleEntry],
    translate: TranslateFn,
    delay: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Tuple[str, int]:
    """
    逐条翻译字幕并重新组装为双语 SRT 文本，返回 (文本, 总用量)。

    严格串行：上一条的翻译结果返回后才会发起下一条请求，
    相邻两次请求之间固定等待 delay 秒以适配接口限速。
    翻译回调抛出的异常原样向上传播，不做重试。
    """
    translated: List[TranslatedEntry] = []
    total_cost = 0

    for position, entry in enumerate(entries):
        if position > 0 and delay > 0:
            sleep(delay)
        translated_text, cost = translate(entry.text)
        total_cost += cost or 0
        translated.append(TranslatedEntry.from_entry(entry, translated_text or ""))

    return translated_entries_to_srt(translated), total_cost


class SubTranslatePipeline:
    """
    读取 SRT -> 逐条翻译 -> 写出双语 SRT。

    输出文件只在全部条目翻译成功后一次性写入，中途失败不会产生或覆盖输出文件。
    """

    def __init__(
        self,
        config: SubTranslateConfig,
        translator: TranslateFn | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config
        self.translator = translator if translator is not None else LLMTranslator(config)
        self.sleep = sleep
        self.entry_count = 0

    def _counted(self, entries: Iterable[SubtitleEntry]) -> Iterable[SubtitleEntry]:
        for entry in entries:
            self.entry_count += 1
            yield entry

    def run(self) -> PipelineResult:
        print(f"开始翻译文件: {self.config.input_path}\n")
        self.entry_count = 0

        entries = self._counted(read_entries(self.config.input_path))
        srt_text, total_cost = translate_entries(
            entries,
            self.translator,
            delay=self.config.delay,
            sleep=self.sleep,
        )
        print(f"Total token costs: {total_cost}")

        output_path = write_srt_text(srt_text, self.config.output_path)
        print(f"翻译完成，输出已保存到: {output_path}")
        return PipelineResult(
            output_path=output_path,
            entry_count=self.entry_count,
            total_cost=total_cost,
        )
