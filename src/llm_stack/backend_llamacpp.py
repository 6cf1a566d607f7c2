# src/llm_stack/backend_llamacpp.py

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import List

from llama_cpp import Llama

from spec.llm import ChatBackend, ChatMessage
from .backend import parse_completion
from .config import LLMConfig
from .errors import LLMServiceError


class LlamaCppChatBackend(ChatBackend):
    """ChatBackend running a local GGUF model through llama.cpp.

    create_chat_completion already returns the OpenAI-style shape, so the
    same parse_completion() applies. Inference is blocking and runs in a
    worker thread to keep the event loop responsive.
    """

    def __init__(self, config: LLMConfig) -> None:
        if not config.model_path:
            raise ValueError("LlamaCppChatBackend requires ai_chat.model_path.")

        path = Path(config.model_path)
        if not path.exists():
            raise FileNotFoundError(path)

        # If gpu layers not set, offload all and let llama.cpp fit what VRAM allows
        gpu_layers = 9999 if config.n_gpu_layers is None else config.n_gpu_layers
        default_threads = max(1, (os.cpu_count() or 1) - 1)

        self._llm = Llama(
            model_path=str(path),
            n_ctx=config.n_ctx,
            n_gpu_layers=gpu_layers,
            n_threads=config.n_threads or default_threads,
            verbose=False,
        )
        self._lock = asyncio.Lock()

    async def complete(
        self,
        messages: List[ChatMessage],
        *,
        max_tokens: int,
        temperature: float,
    ) -> str:
        # one inference at a time; the model is not re-entrant
        async with self._lock:
            try:
                out = await asyncio.to_thread(
                    self._llm.create_chat_completion,
                    messages=[dict(m) for m in messages],
                    max_tokens=max_tokens,
                    temperature=temperature,
                )
            except (RuntimeError, ValueError) as exc:
                raise LLMServiceError("transport", {"error": repr(exc)}) from exc
        return parse_completion(out)

    async def close(self) -> None:
        self._llm = None
