from __future__ import annotations

from .translator import TranslationEngine, TranslationError, TranslationResult
from .llm_translator import LLMTranslator

__all__ = ["TranslationEngine", "TranslationError", "TranslationResult", "LLMTranslator"]
