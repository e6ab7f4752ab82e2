"""
Tests for the chat-completion client.
"""

import asyncio
import json

import httpx
import pytest

from meeting_tracker.core.exceptions import MalformedModelOutputError, UpstreamHttpError
from meeting_tracker.services.llm_client import LLMClient


def make_client(handler, api_key="secret-key") -> LLMClient:
    return LLMClient(
        api_base="https://llm.test/",
        deployment="gpt-4o",
        api_version="2025-01-01-preview",
        api_key=api_key,
        transport=httpx.MockTransport(handler),
    )


class TestCompletionsUrl:
    def test_url_layout(self):
        client = make_client(lambda request: httpx.Response(200))
        assert client.completions_url == (
            "https://llm.test/openai/deployments/gpt-4o"
            "/chat/completions?api-version=2025-01-01-preview"
        )


class TestChat:
    """Tests for LLMClient.chat."""

    def test_request_and_response(self):
        """The request carries the api-key header and the sampling settings."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"choices": [{"message": {"role": "assistant", "content": "[]"}}]},
            )

        client = make_client(handler)
        result = asyncio.run(
            client.chat([{"role": "user", "content": "hi"}], temperature=0.7)
        )

        assert result == "[]"
        assert seen["headers"]["api-key"] == "secret-key"
        assert seen["body"]["temperature"] == 0.7
        assert seen["body"]["max_tokens"] == client.max_tokens
        assert seen["body"]["messages"] == [{"role": "user", "content": "hi"}]

    def test_missing_content_returns_empty_string(self):
        client = make_client(lambda request: httpx.Response(200, json={"choices": []}))
        assert asyncio.run(client.chat([{"role": "user", "content": "hi"}])) == ""

    def test_non_2xx_raises_with_status_and_body(self):
        client = make_client(
            lambda request: httpx.Response(429, text="rate limited")
        )
        with pytest.raises(UpstreamHttpError) as exc_info:
            asyncio.run(client.chat([{"role": "user", "content": "hi"}]))

        assert exc_info.value.upstream_status == 429
        assert exc_info.value.body == "rate limited"
        assert exc_info.value.status_code == 502

    def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        with pytest.raises(UpstreamHttpError):
            asyncio.run(client.chat([{"role": "user", "content": "hi"}]))

    def test_missing_api_key(self):
        """No request is made without a key."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"choices": []})

        client = make_client(handler, api_key="")
        with pytest.raises(UpstreamHttpError) as exc_info:
            asyncio.run(client.chat([{"role": "user", "content": "hi"}]))

        assert "not configured" in exc_info.value.message
        assert calls == []


class TestHealthCheck:
    """Tests for LLMClient.health_check."""

    def test_healthy(self):
        client = make_client(lambda request: httpx.Response(200, json={"choices": []}))
        result = asyncio.run(client.health_check())
        assert result["status"] == "healthy"
        assert result["deployment"] == "gpt-4o"

    def test_unhealthy(self):
        client = make_client(lambda request: httpx.Response(401, text="bad key"))
        result = asyncio.run(client.health_check())
        assert result["status"] == "unhealthy"
        assert result["error"] == "HTTP 401"

    def test_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = asyncio.run(make_client(handler).health_check())
        assert result["status"] == "unreachable"


class TestUnreadableBody:
    """A 2xx answer that is not a completion object."""

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>gateway</html>"),
            httpx.Response(200, json=["not", "an", "object"]),
            httpx.Response(200, json={"choices": ["plain string"]}),
            httpx.Response(200, json={"choices": [{"message": {"content": {"nested": 1}}}]}),
        ],
    )
    def test_raises_malformed_output(self, response: httpx.Response):
        client = make_client(lambda request: response)
        with pytest.raises(MalformedModelOutputError):
            asyncio.run(client.chat([{"role": "user", "content": "hi"}]))
