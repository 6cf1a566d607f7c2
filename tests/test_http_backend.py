# tests/test_http_backend.py
"""
Tests for llm_stack.backend.HttpChatBackend with a fake aiohttp session.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import aiohttp
import pytest

from llm_stack.backend import HttpChatBackend, create_chat_backend, parse_completion
from llm_stack.config import LLMConfig
from llm_stack.errors import LLMServiceError


class FakeResponse:
    def __init__(self, status: int, payload: Any = None, body: str = "") -> None:
        self.status = status
        self._payload = payload
        self._body = body

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None

    async def text(self) -> str:
        return self._body

    async def json(self, content_type: Optional[str] = None) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, response: FakeResponse, requests: List[Dict[str, Any]]) -> None:
        self._response = response
        self._requests = requests

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None

    def post(self, url: str, *, json: Any, headers: Dict[str, str]) -> FakeResponse:
        self._requests.append({"url": url, "json": json, "headers": headers})
        return self._response


def make_backend(response: FakeResponse, *, api_key: str = "secret"):
    requests: List[Dict[str, Any]] = []
    config = LLMConfig(endpoint="https://llm.example/v1/chat/completions", model="tiny", api_key=api_key)
    backend = HttpChatBackend(config, session_factory=lambda **kw: FakeSession(response, requests))
    return backend, requests


def completion(text: str) -> Dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


MESSAGES = [{"role": "system", "content": "sys"}, {"role": "user", "content": "hi"}]


@pytest.mark.asyncio
async def test_complete_posts_payload_and_parses_reply() -> None:
    backend, requests = make_backend(FakeResponse(200, completion("  follow \n")))

    text = await backend.complete(MESSAGES, max_tokens=10, temperature=0.2)

    assert text == "follow"
    sent = requests[0]
    assert sent["url"] == "https://llm.example/v1/chat/completions"
    assert sent["headers"]["Authorization"] == "Bearer secret"
    assert sent["json"] == {
        "model": "tiny",
        "messages": MESSAGES,
        "max_tokens": 10,
        "temperature": 0.2,
    }


@pytest.mark.asyncio
async def test_missing_key_is_transport_error() -> None:
    backend, requests = make_backend(FakeResponse(200, completion("x")), api_key="")

    with pytest.raises(LLMServiceError) as excinfo:
        await backend.complete(MESSAGES, max_tokens=10, temperature=0.2)

    assert excinfo.value.code == "transport"
    assert requests == []

    backend.set_api_key("later")
    assert backend.has_api_key
    assert await backend.complete(MESSAGES, max_tokens=10, temperature=0.2) == "x"


@pytest.mark.asyncio
async def test_http_status_error_carries_body() -> None:
    backend, _ = make_backend(FakeResponse(429, body="rate limited"))

    with pytest.raises(LLMServiceError) as excinfo:
        await backend.complete(MESSAGES, max_tokens=10, temperature=0.2)

    assert excinfo.value.code == "status"
    assert excinfo.value.details == {"status": 429, "body": "rate limited"}


@pytest.mark.asyncio
async def test_client_error_and_bad_json() -> None:
    broken, _ = make_backend(FakeResponse(200, aiohttp.ClientConnectionError("refused")))
    with pytest.raises(LLMServiceError) as excinfo:
        await broken.complete(MESSAGES, max_tokens=10, temperature=0.2)
    assert excinfo.value.code == "transport"

    garbled, _ = make_backend(FakeResponse(200, ValueError("not json")))
    with pytest.raises(LLMServiceError) as excinfo:
        await garbled.complete(MESSAGES, max_tokens=10, temperature=0.2)
    assert excinfo.value.code == "malformed"


def test_parse_completion_rejects_bad_shapes() -> None:
    for payload in ({}, {"choices": []}, {"choices": [{"message": {"content": 3}}]}, None):
        with pytest.raises(LLMServiceError):
            parse_completion(payload)


def test_create_chat_backend() -> None:
    backend = create_chat_backend({"backend": "http", "api_key": "k"})
    assert isinstance(backend, HttpChatBackend)
    assert backend.has_api_key

    with pytest.raises(ValueError):
        create_chat_backend({"backend": "carrier_pigeon"})
