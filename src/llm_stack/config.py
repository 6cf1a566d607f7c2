# src/llm_stack/config.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


DEFAULT_ENDPOINT = "https://api.mistral.ai/v1/chat/completions"
DEFAULT_MODEL = "mistral-tiny"


@dataclass
class LLMConfig:
    """Language-service settings read from the `ai_chat` config section."""

    backend: str = "http"                   # "http" | "llama_cpp"
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    api_key: str = ""
    timeout_s: float = 10.0

    # local backend only
    model_path: Optional[str] = None
    n_ctx: int = 2048
    n_gpu_layers: Optional[int] = None
    n_threads: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LLMConfig":
        """Convenience constructor from a plain dict (e.g. YAML)."""
        return cls(
            backend=str(data.get("backend") or "http"),
            endpoint=data.get("endpoint") or DEFAULT_ENDPOINT,
            model=data.get("model") or DEFAULT_MODEL,
            api_key=data.get("api_key") or "",
            timeout_s=float(data.get("timeout_s", 10.0)),
            model_path=data.get("model_path"),
            n_ctx=int(data.get("n_ctx", 2048)),
            n_gpu_layers=data.get("n_gpu_layers"),
            n_threads=data.get("n_threads"),
        )
