from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from app.services import grok_client
from app.services.grok_client import GrokConfigurationError, GrokResponseError, call_grok

MESSAGES = [{"role": "user", "content": "Analyze this"}]


def _run(transport: httpx.MockTransport, **kwargs) -> str:
    return asyncio.run(call_grok(MESSAGES, transport=transport, **kwargs))


def test_request_shape_and_reply(monkeypatch):
    monkeypatch.setattr(grok_client, "XAI_API_KEY", "xai-secret")
    monkeypatch.setattr(grok_client, "XAI_BASE_URL", "https://api.x.ai/v1")
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": "{\"summary\": \"ok\"}"}}]})

    text = _run(httpx.MockTransport(handler))

    assert text == '{"summary": "ok"}'
    assert seen["url"] == "https://api.x.ai/v1/chat/completions"
    assert seen["auth"] == "Bearer xai-secret"
    assert seen["body"] == {
        "model": "grok-4",
        "messages": MESSAGES,
        "max_tokens": 4000,
        "temperature": 0.3,
    }


def test_missing_api_key_fails_before_network(monkeypatch):
    monkeypatch.setattr(grok_client, "XAI_API_KEY", None)

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(GrokConfigurationError):
        _run(httpx.MockTransport(handler))


def test_http_error_status_propagates(monkeypatch):
    monkeypatch.setattr(grok_client, "XAI_API_KEY", "xai-secret")
    transport = httpx.MockTransport(lambda request: httpx.Response(503, json={"error": "unavailable"}))
    with pytest.raises(httpx.HTTPStatusError):
        _run(transport)


def test_empty_choices_raise(monkeypatch):
    monkeypatch.setattr(grok_client, "XAI_API_KEY", "xai-secret")
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"choices": []}))
    with pytest.raises(GrokResponseError):
        _run(transport)
