"""Shared fixtures: an app wired to a throwaway SQLite file and a fake AI provider."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from src.core.config import Settings
from src.main import create_app
from src.apps.blog.services.ai_service import AIService


def completion(text):
    """OpenRouter-style chat completion body."""
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


class FakeProvider:
    """Records requests and answers with a canned completion."""

    def __init__(self, text="Generated text.", status_code=200):
        self.text = text
        self.status_code = status_code
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code >= 400:
            return httpx.Response(self.status_code, text="upstream unavailable")
        return httpx.Response(self.status_code, json=completion(self.text))

    @property
    def last_payload(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        ASYNC_DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'blogify.db'}",
        OPENROUTER_API_KEY="test-key",
        OPENROUTER_BASE_URL="https://openrouter.test/api/v1",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def ai_service(provider):
    return AIService(
        api_key="test-key",
        base_url="https://openrouter.test/api/v1",
        transport=httpx.MockTransport(provider),
    )


@pytest.fixture
def client(settings, ai_service):
    app = create_app(settings=settings, ai_service=ai_service)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_post(client):
    """Create a post through the API and return its data."""

    def _make_post(**overrides):
        payload = {
            "title": "First Post",
            "description": "A short summary.",
            "content": "# First Post\n\nHello **world**.",
        }
        payload.update(overrides)
        response = client.post("/api/blogs/", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make_post
