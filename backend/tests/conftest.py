"""Pytest configuration and fixtures for tests."""

import os
import sys
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from auditpro.llm.base import LLMProvider  # noqa: E402
from auditpro.llm.factory import get_llm_provider  # noqa: E402
from auditpro.main import app  # noqa: E402
from auditpro.services.queue_store import QueueStore, get_queue_store  # noqa: E402

SAMPLE_AUDIT = """## CUSTOMER PROFILE SNAPSHOT
---
## SECTION 1: CALL CONTEXT & HISTORY
Customer reports repeated billing errors.
- Second call this month

## SECTION 7: RISK INDICATORS
- High churn risk: "I'm done with you guys"
"""


class FakeProvider(LLMProvider):
    """In-memory provider that records prompts and returns a canned reply."""

    def __init__(self, reply: str = SAMPLE_AUDIT, key: str = "test-key") -> None:
        self.reply = reply
        self.key = key
        self.calls: list[tuple[str, str]] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def model_name(self) -> str:
        return "fake-model-1"

    @property
    def api_key(self) -> str:
        return self.key

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        return self.reply


@pytest.fixture
def analyzer() -> AsyncMock:
    """Analyzer stub returning the sample audit text."""
    return AsyncMock(return_value=SAMPLE_AUDIT)


@pytest.fixture
def store(analyzer: AsyncMock) -> QueueStore:
    """Provide a fresh, empty queue for each test."""
    return QueueStore(analyzer)


@pytest.fixture
def fake_llm() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(store: QueueStore, fake_llm: FakeProvider):
    """TestClient wired to the per-test queue and fake provider."""
    app.dependency_overrides[get_queue_store] = lambda: store
    app.dependency_overrides[get_llm_provider] = lambda: fake_llm
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
