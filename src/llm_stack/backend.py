# src/llm_stack/backend.py
"""
Chat-completion transports for the intent pipeline.

Every role (classify, extract, details, reply) uses the same call shape:

    {model, messages: [{role, content}], max_tokens, temperature}
        -> {choices: [{message: {content}}]}

HttpChatBackend posts that payload to a hosted endpoint with a bearer key.
backend_llamacpp.LlamaCppChatBackend produces the same shape from a local
GGUF model. create_chat_backend() picks one from LLMConfig.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

import aiohttp

from spec.llm import ChatBackend, ChatMessage
from .config import LLMConfig
from .errors import LLMServiceError


log = logging.getLogger(__name__)

SessionFactory = Callable[..., Any]


def parse_completion(data: Any) -> str:
    """
    Pull choices[0].message.content out of a chat-completion payload.

    Raises LLMServiceError("malformed") when the shape is wrong.
    """
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise LLMServiceError("malformed", {"error": repr(exc)}) from exc
    if not isinstance(content, str):
        raise LLMServiceError("malformed", {"error": f"content is {type(content).__name__}"})
    return content.strip()


class HttpChatBackend(ChatBackend):
    """
    ChatBackend over HTTP (OpenAI-compatible chat-completions endpoint).

    A fresh aiohttp.ClientSession is opened per call and bounded by
    `timeout_s`. `session_factory` exists so tests can substitute a fake.
    """

    def __init__(
        self,
        config: LLMConfig,
        *,
        session_factory: Optional[SessionFactory] = None,
    ) -> None:
        self._config = config
        self._api_key = config.api_key or ""
        self._session_factory = session_factory or aiohttp.ClientSession

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    def set_api_key(self, api_key: str) -> None:
        self._api_key = api_key or ""

    def build_payload(
        self,
        messages: List[ChatMessage],
        *,
        max_tokens: int,
        temperature: float,
    ) -> Dict[str, Any]:
        return {
            "model": self._config.model,
            "messages": [dict(m) for m in messages],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    async def complete(
        self,
        messages: List[ChatMessage],
        *,
        max_tokens: int,
        temperature: float,
    ) -> str:
        if not self._api_key:
            raise LLMServiceError("transport", {"error": "no API key configured"})

        payload = self.build_payload(messages, max_tokens=max_tokens, temperature=temperature)
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }
        timeout = aiohttp.ClientTimeout(total=self._config.timeout_s)

        try:
            async with self._session_factory(timeout=timeout) as session:
                async with session.post(self._config.endpoint, json=payload, headers=headers) as resp:
                    if resp.status < 200 or resp.status >= 300:
                        body = await resp.text()
                        raise LLMServiceError(
                            "status",
                            {"status": resp.status, "body": body[:500]},
                        )
                    data = await resp.json(content_type=None)
        except LLMServiceError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise LLMServiceError("transport", {"error": repr(exc)}) from exc
        except ValueError as exc:
            raise LLMServiceError("malformed", {"error": repr(exc)}) from exc

        text = parse_completion(data)
        log.debug("chat completion (%d tokens max): %r", max_tokens, text)
        return text

    async def close(self) -> None:
        return None


def create_chat_backend(
    config: LLMConfig | Mapping[str, Any],
    *,
    session_factory: Optional[SessionFactory] = None,
) -> ChatBackend:
    """
    Build the ChatBackend named by `config.backend`.

    The local backend is imported lazily so llama_cpp stays optional.
    """
    cfg = config if isinstance(config, LLMConfig) else LLMConfig.from_dict(dict(config))

    if cfg.backend == "http":
        return HttpChatBackend(cfg, session_factory=session_factory)

    if cfg.backend == "llama_cpp":
        from .backend_llamacpp import LlamaCppChatBackend

        return LlamaCppChatBackend(cfg)

    raise ValueError(f"Unknown ai_chat.backend: {cfg.backend!r}")
