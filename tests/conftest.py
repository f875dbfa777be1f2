from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

# No real upstream traffic from tests
os.environ.setdefault("XAI_API_KEY", "xai-test-key")

from app.main import app  # noqa: E402


@pytest.fixture()
def client() -> TestClient:
    with TestClient(app) as tc:
        yield tc


@pytest.fixture()
def learning_data() -> dict:
    return {
        "mainResponses": [
            {"content": "Photosynthesis converts light energy into chemical energy."},
            {"content": "The Calvin cycle fixes carbon dioxide into sugars."},
        ],
        "threadResponses": [
            {
                "threadTitle": "Chlorophyll",
                "context": "Why are leaves green?",
                "content": "Chlorophyll absorbs red and blue light and reflects green.",
            },
        ],
    }


@pytest.fixture()
def fake_grok(monkeypatch):
    """Replace the upstream call; records prompts and returns the configured reply."""

    class FakeGrok:
        def __init__(self):
            self.reply = "{}"
            self.error: Exception | None = None
            self.calls: list[dict] = []

        async def __call__(self, messages, *, max_tokens, temperature):
            self.calls.append({"messages": messages, "max_tokens": max_tokens, "temperature": temperature})
            if self.error is not None:
                raise self.error
            return self.reply

    fake = FakeGrok()
    monkeypatch.setattr("app.api.analyze_learning.call_grok", fake)
    return fake
