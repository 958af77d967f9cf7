from __future__ import annotations

import dataclasses

import fitz
import pytest
from fastapi.testclient import TestClient

from app import create_app
from settings import Settings


class FakeCompletionClient:
    """Stands in for the chat-completion API; ``reply`` maps messages to content."""

    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    def complete(self, messages, max_tokens, temperature):
        self.calls.append({"messages": messages, "max_tokens": max_tokens, "temperature": temperature})
        if isinstance(self.reply, Exception):
            raise self.reply
        if callable(self.reply):
            return self.reply(messages)
        return self.reply


def make_pdf(text: str) -> bytes:
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def pdf_bytes():
    return make_pdf("Senior Python Engineer with SQL")


@pytest.fixture
def fake_client():
    return FakeCompletionClient('{"score": 50, "reasoning": "ok", "improvements": [], "metrics": []}')


@pytest.fixture
def settings():
    return Settings(api_key="test-key")


@pytest.fixture
def make_client(settings):
    def _make(llm, **overrides):
        app_settings = dataclasses.replace(settings, **overrides)
        return TestClient(create_app(settings=app_settings, client=llm))

    return _make
