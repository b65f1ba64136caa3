"""Tests for the OpenRouter-backed AI service."""

import asyncio

import httpx
import pytest

from src.apps.blog.services.ai_service import AIService, AIServiceError
from tests.conftest import FakeProvider


def make_service(provider, api_key="test-key"):
    return AIService(
        api_key=api_key,
        base_url="https://openrouter.test/api/v1",
        model="test-model",
        transport=httpx.MockTransport(provider),
    )


def run(coro):
    return asyncio.run(coro)


class TestComplete:
    def test_sends_chat_completion_request(self):
        provider = FakeProvider("  Hello there.  ")
        service = make_service(provider)

        text = run(service.complete("Say hi", temperature=0.5, max_tokens=10))

        assert text == "Hello there."
        request = provider.requests[0]
        assert str(request.url) == "https://openrouter.test/api/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer test-key"
        assert provider.last_payload == {
            "model": "test-model",
            "messages": [{"role": "user", "content": "Say hi"}],
            "temperature": 0.5,
            "max_tokens": 10,
        }

    def test_missing_key(self):
        provider = FakeProvider()
        service = make_service(provider, api_key="")
        with pytest.raises(AIServiceError):
            run(service.complete("x", temperature=0.5, max_tokens=10))
        assert provider.requests == []

    def test_http_error_status(self):
        service = make_service(FakeProvider(status_code=503))
        with pytest.raises(AIServiceError, match="503"):
            run(service.complete("x", temperature=0.5, max_tokens=10))

    def test_malformed_payload(self):
        service = make_service(lambda request: httpx.Response(200, json={"choices": []}))
        with pytest.raises(AIServiceError):
            run(service.complete("x", temperature=0.5, max_tokens=10))

    def test_transport_failure(self):
        def boom(request):
            raise httpx.ConnectError("connection refused", request=request)

        service = make_service(boom)
        with pytest.raises(AIServiceError, match="request failed"):
            run(service.complete("x", temperature=0.5, max_tokens=10))


class TestGenerateDescription:
    def test_returns_completion(self):
        provider = FakeProvider("A neat summary.")
        service = make_service(provider)
        assert run(service.generate_description("Python")) == "A neat summary."
        assert "Python" in provider.last_payload["messages"][0]["content"]
        assert provider.last_payload["max_tokens"] == 100

    def test_fallback_on_failure(self):
        service = make_service(FakeProvider(status_code=500))
        assert run(service.generate_description("Python")) == (
            "Learn about Python and discover key insights on this topic."
        )


class TestGenerateContent:
    def test_prepends_title_heading(self):
        service = make_service(FakeProvider("Intro paragraph.\n\n\n\nMore."))
        content = run(service.generate_content("Rust"))
        assert content == "# Rust\n\nIntro paragraph.\n\nMore."

    def test_keeps_existing_heading(self):
        service = make_service(FakeProvider("# Rust Guide\n\nBody"))
        assert run(service.generate_content("Rust")) == "# Rust Guide\n\nBody"

    def test_fallback_is_markdown_notice(self):
        service = make_service(FakeProvider(status_code=502))
        content = run(service.generate_content("Rust"))
        assert content.startswith("# Rust\n")
        assert "Content generation is temporarily unavailable" in content
        assert "502" in content

    def test_fallback_keeps_error_inside_code_fence(self):
        service = make_service(
            lambda request: httpx.Response(500, text="bad ```\n# injected")
        )
        content = run(service.generate_content("Rust"))
        assert content.count("```") == 2
        assert "bad '''" in content
