from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, List

import pytest

SAMPLE_SRT = (
    "1\n"
    "00:00:01,000 --> 00:00:02,000\n"
    "Bonjour le monde\n"
    "\n"
    "2\n"
    "00:00:03,000 --> 00:00:04,000\n"
    "Au revoir\n"
)

SAMPLE_TRANSLATIONS = {
    "Bonjour le monde\n": ("你好，世界", 10),
    "Au revoir\n": ("再见", 5),
}

EXPECTED_OUTPUT = (
    "1\n"
    "00:00:01,000 --> 00:00:02,000\n"
    "Bonjour le monde\n"
    "你好，世界\n"
    "\n"
    "2\n"
    "00:00:03,000 --> 00:00:04,000\n"
    "Au revoir\n"
    "再见"
)


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, text: str | None = None) -> None:
        self.payload = payload
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload, ensure_ascii=False)

    def json(self) -> Any:
        if self.payload is None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakePost:
    """记录每次调用，并按 handler 生成响应。"""

    def __init__(self, handler: Callable[[dict], FakeResponse]) -> None:
        self.handler = handler
        self.calls: List[dict] = []

    def __call__(self, url, headers=None, data=None, timeout=None, proxies=None):
        body = json.loads(data)
        self.calls.append(
            {
                "url": url,
                "headers": headers,
                "body": body,
                "timeout": timeout,
                "proxies": proxies,
            }
        )
        return self.handler(body)


def chat_payload(content: str | None, total_tokens: int | None) -> dict:
    payload: dict = {"choices": [{"message": {"role": "assistant"}}]}
    if content is not None:
        payload["choices"][0]["message"]["content"] = content
    if total_tokens is not None:
        payload["usage"] = {"total_tokens": total_tokens}
    return payload


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in [
        "SUBTRANSLATE_API_KEY",
        "SUBTRANSLATE_ENDPOINT",
        "SUBTRANSLATE_MODEL",
        "SUBTRANSLATE_SOURCE_LANG",
        "SUBTRANSLATE_TARGET_LANG",
        "SUBTRANSLATE_SYSTEM_PROMPT",
        "SUBTRANSLATE_DELAY",
        "SUBTRANSLATE_TIMEOUT",
        "SUBTRANSLATE_HTTP_PROXY",
        "SUBTRANSLATE_HTTPS_PROXY",
        "SUBTRANSLATE_DEBUG",
    ]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def api_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUBTRANSLATE_API_KEY", "test-key")
    monkeypatch.setenv("SUBTRANSLATE_ENDPOINT", "https://llm.example.com/v1/chat/completions")


@pytest.fixture
def sample_srt(tmp_path: Path) -> Path:
    path = tmp_path / "input.srt"
    path.write_text(SAMPLE_SRT, encoding="utf-8")
    return path


@pytest.fixture
def fake_post(monkeypatch: pytest.MonkeyPatch) -> FakePost:
    """按原文查表返回译文的假接口。"""

    def handler(body: dict) -> FakeResponse:
        text = body["messages"][1]["content"]
        translated, tokens = SAMPLE_TRANSLATIONS[text]
        return FakeResponse(chat_payload(translated, tokens))

    post = FakePost(handler)
    monkeypatch.setattr("subtranslate.translate.llm_translator.requests.post", post)
    return post
