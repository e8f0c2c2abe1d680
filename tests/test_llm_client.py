"""Tests for the Ollama client"""
import json

import httpx
import pytest

from trial_insights.errors import SummarizationError
from trial_insights.llm.client import OllamaClient, truncate_to_token_limit


def _client(handler) -> OllamaClient:
    return OllamaClient("http://llm.test/", "test-model", transport=httpx.MockTransport(handler))


def test_generate_posts_prompt_and_returns_response():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"response": "A short summary.", "eval_count": 5})

    assert _client(handler).generate("Summarize this") == "A short summary."
    assert seen["url"] == "http://llm.test/api/generate"
    assert seen["body"]["model"] == "test-model"
    assert seen["body"]["prompt"] == "Summarize this"
    assert seen["body"]["stream"] is False


def test_http_error_raises_summarization_error():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503, json={"error": "overloaded"})

    with pytest.raises(SummarizationError):
        _client(handler).generate("x")
    assert len(calls) == 1


def test_transport_error_raises_summarization_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(SummarizationError):
        _client(handler).generate("x")


def test_non_json_body_raises_summarization_error():
    with pytest.raises(SummarizationError):
        _client(lambda request: httpx.Response(200, text="not json")).generate("x")


def test_missing_response_field_is_empty_text():
    assert _client(lambda request: httpx.Response(200, json={"done": True})).generate("x") == ""


def test_truncate_to_token_limit():
    short = "fits"
    assert truncate_to_token_limit(short, 100) == short
    long = "word " * 1000
    out = truncate_to_token_limit(long, 100)
    assert len(out) < len(long)
    assert out.endswith("[... truncated due to context limit ...]")
