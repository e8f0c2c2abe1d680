"""LLM client and API interactions"""
from __future__ import annotations

import httpx
import logging
from typing import Any, Dict, Optional, Protocol

from trial_insights.config import SETTINGS
from trial_insights.errors import SummarizationError

logger = logging.getLogger(__name__)


class SummarizationService(Protocol):
    def generate(self, prompt: str) -> str: ...


def estimate_tokens(text: str) -> int:
    """Estimate token count from text using chars_per_token ratio."""
    return int(len(text) / SETTINGS.chars_per_token)


def truncate_to_token_limit(text: str, max_tokens: int) -> str:
    """Truncate text to approximately fit within token limit."""
    max_chars = int(max_tokens * SETTINGS.chars_per_token)
    if len(text) <= max_chars:
        return text
    truncated = text[:max_chars - 50]
    # Try to break at a sensible point (newline or period)
    last_break = max(truncated.rfind('\n'), truncated.rfind('. '))
    if last_break > max_chars * 0.8:
        truncated = truncated[:last_break + 1]
    return truncated + "\n[... truncated due to context limit ...]"


class OllamaClient:
    """Single-shot client for an Ollama-compatible /api/generate endpoint. No retries."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = (base_url or SETTINGS.ollama_base_url).rstrip("/")
        self.model = model or SETTINGS.ollama_model
        self.timeout = timeout if timeout is not None else SETTINGS.request_timeout
        self._transport = transport

    def _payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": SETTINGS.temperature,
                "top_p": SETTINGS.top_p,
                "num_ctx": SETTINGS.num_ctx,
                "num_predict": SETTINGS.max_tokens,
            },
        }

    def generate(self, prompt: str) -> str:
        est_tokens = estimate_tokens(prompt)
        if est_tokens > SETTINGS.max_prompt_tokens:
            logger.warning(
                f"Prompt exceeds recommended limit: ~{est_tokens} tokens "
                f"(max: {SETTINGS.max_prompt_tokens}). Truncating..."
            )
            prompt = truncate_to_token_limit(prompt, SETTINGS.max_prompt_tokens)
            est_tokens = estimate_tokens(prompt)

        url = f"{self.base_url}/api/generate"
        logger.debug(f"POST {url} model={self.model} prompt={len(prompt)} chars (~{est_tokens} tokens)")

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                r = client.post(url, json=self._payload(prompt))
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPStatusError as e:
            raise SummarizationError(f"LLM returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise SummarizationError(f"LLM request failed: {e!r}") from e
        except ValueError as e:
            raise SummarizationError("LLM returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise SummarizationError("LLM returned an unexpected JSON body")

        response = data.get("response") or ""
        logger.debug(f"LLM response: {len(response)} chars, eval_count={data.get('eval_count', 'N/A')}")
        if not response.strip():
            logger.warning("LLM returned an empty response")
        return response
