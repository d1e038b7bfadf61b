from __future__ import annotations

from abc import ABC, abstractmethod
from typing import NamedTuple


class TranslationError(RuntimeError):
    """翻译调用失败（连接、超时、HTTP 状态或响应无法解析），整次运行随之终止。"""


class TranslationResult(NamedTuple):
    text: str
    cost: int = 0


class TranslationEngine(ABC):
    """
    翻译引擎抽象接口。

    每次调用只翻译一条字幕的正文，返回译文与本次调用的用量（token 数）。
    实例本身可直接作为 translate(text) 回调交给 Pipeline。
    """

    @abstractmethod
    def translate_text(self, text: str) -> TranslationResult:
        """
        翻译一段（可能多行的）字幕文本。
        """

    def __call__(self, text: str) -> TranslationResult:
        return self.translate_text(text)
