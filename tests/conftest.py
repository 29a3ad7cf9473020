"""
Pytest configuration and fixtures
"""
from typing import List, Optional

import pytest
from langchain_core.messages import AIMessage

from config.settings import get_settings


TEST_API_KEY = "test-gemini-key-0123456789"


class FakeLLM:
    """Stands in for ChatGoogleGenerativeAI; records every prompt it receives."""

    def __init__(self, reply: str = "VB Capital invests in fintech and AI.", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List = []

    def invoke(self, prompt):
        self.calls.append(prompt)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.reply)


@pytest.fixture(autouse=True)
def env(monkeypatch):
    """Known environment for every test; settings are rebuilt around it."""
    monkeypatch.setenv("GEMINI_API_KEY", TEST_API_KEY)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("PROMPT_INCLUDE_HISTORY", raising=False)
    monkeypatch.delenv("PROMPT_HISTORY_TURNS", raising=False)
    monkeypatch.delenv("MODEL_TEMPERATURE", raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "")
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    get_settings.cache_clear()


@pytest.fixture
def fake_llm(monkeypatch):
    """Patch model construction so no request ever leaves the process."""
    llm = FakeLLM()
    monkeypatch.setattr("bridge.bridge.build_llm", lambda settings: llm)
    return llm
