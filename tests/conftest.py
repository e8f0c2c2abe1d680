"""Shared fixtures"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from trial_insights.api.main import app, get_llm, get_store
from trial_insights.ingest.load_files import SEED_FILE
from trial_insights.ingest.store import InMemoryRecordStore


class FakeLLM:
    """Records prompts and answers with a canned reply, or raises when told to."""

    def __init__(self, reply: str = "Canned summary.", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore.from_json(SEED_FILE)


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def client(store, fake_llm):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_llm] = lambda: fake_llm
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
