"""Testes para HttpClient (retry e hook de request)."""

from __future__ import annotations

import httpx
import pytest

from messaging_api.common.errors import MessagingApiError
from messaging_api.common.request import RequestPayload
from messaging_api.infra.http import HttpClient, HttpClientConfig

NO_BACKOFF = HttpClientConfig(max_retries=2, backoff_base_seconds=0.0)


@pytest.mark.asyncio
async def test_request_uses_base_url_and_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    async with HttpClient(
        "https://api.example.com/v1/",
        headers={"X-Token": "abc"},
        transport=httpx.MockTransport(handler),
    ) as client:
        response = await client.request("GET", "items")

    assert response.json() == {"ok": True}
    assert str(seen[0].url) == "https://api.example.com/v1/items"
    assert seen[0].headers["x-token"] == "abc"


@pytest.mark.asyncio
async def test_rate_limit_is_retried() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] == 1:
            return httpx.Response(429)
        return httpx.Response(200, json={})

    async with HttpClient(config=NO_BACKOFF, transport=httpx.MockTransport(handler)) as client:
        response = await client.request("POST", "https://api.example.com/send")

    assert response.status_code == 200
    assert calls["count"] == 2


@pytest.mark.asyncio
async def test_rate_limit_returns_last_response_when_exhausted() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(429)

    async with HttpClient(config=NO_BACKOFF, transport=httpx.MockTransport(handler)) as client:
        response = await client.request("POST", "https://api.example.com/send")

    assert response.status_code == 429
    assert calls["count"] == 3


@pytest.mark.asyncio
async def test_server_error_is_not_retried() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(503)

    async with HttpClient(config=NO_BACKOFF, transport=httpx.MockTransport(handler)) as client:
        response = await client.request("POST", "https://api.example.com/send")

    assert response.status_code == 503
    assert calls["count"] == 1


@pytest.mark.asyncio
async def test_connection_error_raises_after_retries() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        raise httpx.ConnectError("refused", request=request)

    async with HttpClient(config=NO_BACKOFF, transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(MessagingApiError) as exc_info:
            await client.request("GET", "https://api.example.com/x")

    assert calls["count"] == 3
    assert exc_info.value.is_retryable is True
    assert exc_info.value.response is None


@pytest.mark.asyncio
async def test_read_timeout_is_not_resent() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] == 1:
            raise httpx.ReadTimeout("slow", request=request)
        return httpx.Response(200, json={"ok": True})

    async with HttpClient(config=NO_BACKOFF, transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(MessagingApiError) as exc_info:
            await client.request("POST", "https://api.example.com/send")

    assert calls["count"] == 1
    assert exc_info.value.is_retryable is True


@pytest.mark.asyncio
async def test_connect_timeout_is_retried() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] == 1:
            raise httpx.ConnectTimeout("slow", request=request)
        return httpx.Response(200, json={"ok": True})

    async with HttpClient(config=NO_BACKOFF, transport=httpx.MockTransport(handler)) as client:
        response = await client.request("POST", "https://api.example.com/send")

    assert response.status_code == 200
    assert calls["count"] == 2


@pytest.mark.asyncio
async def test_on_request_receives_every_request() -> None:
    captured: list[RequestPayload] = []

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200)

    async with HttpClient(
        "https://api.example.com/",
        on_request=captured.append,
        transport=httpx.MockTransport(handler),
    ) as client:
        await client.request("POST", "send", json={"text": "hi"})

    assert captured == [
        RequestPayload(
            method="POST",
            url="https://api.example.com/send",
            headers=captured[0].headers,
            body={"text": "hi"},
        )
    ]
