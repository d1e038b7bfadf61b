from __future__ import annotations

from .config import ConfigError, SubTranslateConfig
from .pipeline import PipelineResult, SubTranslatePipeline, translate_entries

__all__ = [
    "ConfigError",
    "SubTranslateConfig",
    "PipelineResult",
    "SubTranslatePipeline",
    "translate_entries",
]

__version__ = "0.1.0"
