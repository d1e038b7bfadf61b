from __future__ import annotations

from dataclasses import dataclass
import math
import os
from pathlib import Path
from typing import Optional

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_SOURCE_LANG = "French"
DEFAULT_TARGET_LANG = "Chinese"
DEFAULT_DELAY = 2.0


class ConfigError(RuntimeError):
    """必填配置缺失或取值非法。"""


def _env_str(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


def _env_float(name: str) -> float | None:
    raw = _env_str(name)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


@dataclass
class SubTranslateConfig:
    """
    一次运行所需的全部配置，启动时构建一次，之后注入到翻译器与 Pipeline。

    环境变量约定（来自 .env 或系统环境），显式传入的参数优先：
      - SUBTRANSLATE_API_KEY        # 必填，用于 Authorization: Bearer
      - SUBTRANSLATE_ENDPOINT       # 必填，兼容 OpenAI Chat Completions 的完整 URL
      - SUBTRANSLATE_MODEL          # 可选，默认 gpt-3.5-turbo
      - SUBTRANSLATE_SOURCE_LANG    # 可选，默认 French
      - SUBTRANSLATE_TARGET_LANG    # 可选，默认 Chinese
      - SUBTRANSLATE_SYSTEM_PROMPT  # 可选，完整覆盖系统提示词
      - SUBTRANSLATE_DELAY          # 可选，两次请求之间的间隔秒数，默认 2
      - SUBTRANSLATE_TIMEOUT        # 可选，单次请求超时秒数，默认不设置
      - SUBTRANSLATE_HTTP_PROXY / SUBTRANSLATE_HTTPS_PROXY
      - SUBTRANSLATE_DEBUG          # 设为 1 时打印请求与原始响应
    """

    input_path: Path
    output_path: Path
    api_key: str
    endpoint: str
    model: str = DEFAULT_MODEL
    source_lang: str = DEFAULT_SOURCE_LANG
    target_lang: str = DEFAULT_TARGET_LANG
    system_prompt: Optional[str] = None
    delay: float = DEFAULT_DELAY
    timeout: Optional[float] = None
    http_proxy: Optional[str] = None
    https_proxy: Optional[str] = None
    debug: bool = False

    @property
    def proxies(self) -> dict[str, str] | None:
        proxies: dict[str, str] = {}
        if self.http_proxy:
            proxies["http"] = self.http_proxy
        if self.https_proxy:
            proxies["https"] = self.https_proxy
        return proxies or None

    @classmethod
    def from_paths(
        cls,
        input_path: str | Path,
        output_path: str | Path,
        api_key: str | None = None,
        endpoint: str | None = None,
        model: str | None = None,
        source_lang: str | None = None,
        target_lang: str | None = None,
        system_prompt: str | None = None,
        delay: float | None = None,
        timeout: float | None = None,
        debug: bool | None = None,
    ) -> "SubTranslateConfig":
        api_key_value = api_key or _env_str("SUBTRANSLATE_API_KEY")
        if not api_key_value:
            raise ConfigError("Missing API key: set SUBTRANSLATE_API_KEY.")
        endpoint_value = endpoint or _env_str("SUBTRANSLATE_ENDPOINT")
        if not endpoint_value:
            raise ConfigError("Missing endpoint: set SUBTRANSLATE_ENDPOINT.")

        if delay is None:
            env_delay = _env_float("SUBTRANSLATE_DELAY")
            delay_value = DEFAULT_DELAY if env_delay is None else env_delay
        else:
            delay_value = float(delay)
        if not math.isfinite(delay_value) or delay_value < 0:
            raise ConfigError(f"Delay must be a finite non-negative number, got {delay_value}")

        # 未设置时交给 requests 的默认行为（不超时）
        timeout_value = timeout if timeout is not None else _env_float("SUBTRANSLATE_TIMEOUT")
        if timeout_value is not None and (not math.isfinite(timeout_value) or timeout_value <= 0):
            raise ConfigError(f"Timeout must be a finite positive number, got {timeout_value}")

        if debug is None:
            debug_value = os.getenv("SUBTRANSLATE_DEBUG", "").strip() == "1"
        else:
            debug_value = debug

        return cls(
            input_path=Path(input_path).expanduser().resolve(),
            output_path=Path(output_path).expanduser().resolve(),
            api_key=api_key_value,
            endpoint=endpoint_value,
            model=model or _env_str("SUBTRANSLATE_MODEL") or DEFAULT_MODEL,
            source_lang=source_lang or _env_str("SUBTRANSLATE_SOURCE_LANG") or DEFAULT_SOURCE_LANG,
            target_lang=target_lang or _env_str("SUBTRANSLATE_TARGET_LANG") or DEFAULT_TARGET_LANG,
            system_prompt=system_prompt or _env_str("SUBTRANSLATE_SYSTEM_PROMPT"),
            delay=delay_value,
            timeout=timeout_value,
            http_proxy=_env_str("SUBTRANSLATE_HTTP_PROXY"),
            https_proxy=_env_str("SUBTRANSLATE_HTTPS_PROXY"),
            debug=debug_value,
        )
