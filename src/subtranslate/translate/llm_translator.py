from __future__ import annotations

from datetime import datetime
import json
from pathlib import Path
from typing import Any, Dict

import requests

from subtranslate.config import SubTranslateConfig

from .translator import TranslationEngine, TranslationError, TranslationResult


def _load_prompt(name: str) -> str:
    """
    从包内 prompts/ 目录加载指定的 prompt 模板。
    """
    prompt_path = Path(__file__).resolve().parent / "prompts" / name
    if not prompt_path.is_file():
        raise FileNotFoundError(f"Prompt file not found: {prompt_path}")
    return prompt_path.read_text(encoding="utf-8").strip()


def _timestamp() -> str:
    # 形如 2024-05-01 12:00:00.123
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]


def build_system_prompt(config: SubTranslateConfig) -> str:
    if config.system_prompt:
        return config.system_prompt
    template = _load_prompt("translate_system.md")
    return template.format(
        source_language=config.source_lang,
        target_language=config.target_lang,
    )


def extract_completion(data: Any) -> str:
    """
    取 choices[0].message.content；字段缺失或类型不符时返回空字符串。
    """
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""


def extract_cost(data: Any) -> int:
    """
    取 usage.total_tokens；字段缺失或不是整数时返回 0。
    """
    if not isinstance(data, dict):
        return 0
    usage = data.get("usage")
    if not isinstance(usage, dict):
        return 0
    total = usage.get("total_tokens")
    if isinstance(total, bool) or not isinstance(total, int):
        return 0
    return total


class LLMTranslator(TranslationEngine):
    """
    通过 OpenAI Chat Completions 兼容接口逐条翻译字幕。

    每次请求由固定的 system 指令与承载原文的单条 user 消息组成；
    指令在构造时确定，整次运行内复用。
    """

    def __init__(self, config: SubTranslateConfig) -> None:
        self.config = config
        self.url = config.endpoint
        self.model = config.model
        self.api_key = config.api_key
        self.timeout = config.timeout
        self.proxies = config.proxies
        self.system_prompt = build_system_prompt(config)
        self.debug = config.debug

        # 调试日志文件路径（仅在 debug 模式下启用）
        self.log_path: Path | None = None
        if self.debug:
            log_dir = Path.cwd() / "logs"
            log_dir.mkdir(parents=True, exist_ok=True)
            self.log_path = log_dir / "subtranslate_debug.log"

    def _debug_print(self, title: str, payload: Any, limit: int | None = 4000) -> None:
        """
        打印调试信息，并对超长内容进行可选截断；同时以 UTF-8 追加到日志文件。
        """
        if not self.debug:
            return
        try:
            console_text = json.dumps(payload, ensure_ascii=True, indent=2)
        except TypeError:
            console_text = repr(payload)

        if limit is not None and len(console_text) > limit:
            display = console_text[:limit] + f"\n... (truncated, {len(console_text)} chars total)"
        else:
            display = console_text

        print(f"\n[LLM DEBUG] {title}")
        print(display)

        if self.log_path is not None:
            try:
                file_text = json.dumps(payload, ensure_ascii=False, indent=2)
            except TypeError:
                file_text = repr(payload)
            with self.log_path.open("a", encoding="utf-8") as f:
                f.write(f"\n[LLM DEBUG] {_timestamp()} {title}\n")
                f.write(file_text)
                f.write("\n")

    def build_request_body(self, text: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": text},
            ],
        }

    def _call_chat(self, text: str) -> Any:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        body = self.build_request_body(text)
        self._debug_print("请求体预览", body)

        try:
            response = requests.post(
                self.url,
                headers=headers,
                data=json.dumps(body, ensure_ascii=False).encode("utf-8"),
                timeout=self.timeout,
                proxies=self.proxies,
            )
        except requests.RequestException as exc:
            raise TranslationError(f"LLM request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as json_err:
            snippet = response.text[:500]
            raise TranslationError(
                f"LLM response is not valid JSON, first 500 chars: {snippet}"
            ) from json_err

        # 不校验 HTTP 状态码：JSON 形式的错误响应按字段缺失处理（译文为空、用量为 0）
        self._debug_print("完整响应 JSON", data)
        return data

    def translate_text(self, text: str) -> TranslationResult:
        print(f"{_timestamp()} ORIGIN -- {text.strip()}")

        data = self._call_chat(text)
        completion = extract_completion(data)
        print(f"{_timestamp()} TRANSLATED -- {completion}")

        cost = extract_cost(data)
        print(f"COSTS: {cost} Tokens\n")
        return TranslationResult(completion, cost)
