"""Testes para o hook on_request e a redação de URLs."""

from __future__ import annotations

import logging

import httpx
import pytest

from messaging_api.common.request import (
    RequestPayload,
    create_request_hook,
    default_on_request,
    redact_url,
)


@pytest.mark.asyncio
async def test_hook_delivers_payload_without_auth_headers() -> None:
    captured: list[RequestPayload] = []
    hook = create_request_hook(captured.append)
    request = httpx.Request(
        "POST",
        "https://api.line.me/v2/bot/message/push",
        json={"to": "U1"},
        headers={"Authorization": "Bearer secret", "X-Custom": "1"},
    )

    await hook(request)

    assert len(captured) == 1
    payload = captured[0]
    assert payload.method == "POST"
    assert payload.url == "https://api.line.me/v2/bot/message/push"
    assert payload.body == {"to": "U1"}
    assert "authorization" not in {key.lower() for key in payload.headers}
    assert payload.headers["x-custom"] == "1"


@pytest.mark.asyncio
async def test_hook_awaits_async_callback() -> None:
    seen: list[str] = []

    async def on_request(payload: RequestPayload) -> None:
        seen.append(payload.url)

    hook = create_request_hook(on_request)
    await hook(httpx.Request("GET", "https://chatapi.viber.com/pa/get_online"))

    assert seen == ["https://chatapi.viber.com/pa/get_online"]


@pytest.mark.asyncio
async def test_hook_redacts_secrets_in_form_body() -> None:
    captured: list[RequestPayload] = []
    hook = create_request_hook(captured.append)
    request = httpx.Request(
        "POST",
        "https://login.example.com/token",
        data={"client_id": "app", "client_secret": "s3cr3t"},
    )

    await hook(request)

    assert "s3cr3t" not in captured[0].body
    assert "client_id=app" in captured[0].body


@pytest.mark.asyncio
async def test_hook_redacts_token_keys_in_json_body() -> None:
    captured: list[RequestPayload] = []
    hook = create_request_hook(captured.append)
    request = httpx.Request(
        "POST",
        "https://graph.facebook.com/v6.0/",
        json={
            "access_token": "PAGE-SECRET-TOKEN",
            "batch": [{"relative_url": "me?access_token=OTHER&appsecret_proof=abc"}],
        },
    )

    await hook(request)

    body = captured[0].body
    assert body["access_token"] == "***"
    assert body["batch"][0]["relative_url"] == "me?access_token=***&appsecret_proof=***"


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        (
            "https://api.telegram.org/bot123:ABC-def/sendMessage",
            "https://api.telegram.org/bot***/sendMessage",
        ),
        (
            "https://graph.facebook.com/v6.0/me/messages?access_token=tok&appsecret_proof=p",
            "https://graph.facebook.com/v6.0/me/messages?access_token=***&appsecret_proof=***",
        ),
        (
            "https://api.weixin.qq.com/cgi-bin/token?appid=a&secret=s",
            "https://api.weixin.qq.com/cgi-bin/token?appid=a&secret=***",
        ),
        ("https://api.line.me/v2/bot/info", "https://api.line.me/v2/bot/info"),
    ],
)
def test_redact_url(url: str, expected: str) -> None:
    assert redact_url(url) == expected


def test_default_on_request_logs_method_and_url(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="messaging_api.common.request")

    default_on_request(
        RequestPayload(method="post", url="https://api.line.me/x", body={"a": 1})
    )

    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == "POST - https://api.line.me/x"
    assert '"a": 1' in messages[1]


def test_default_on_request_is_silent_above_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="messaging_api.common.request")

    default_on_request(RequestPayload(method="GET", url="https://api.line.me/x"))

    assert caplog.records == []
