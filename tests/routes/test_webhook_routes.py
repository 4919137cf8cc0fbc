"""Testes para os routers FastAPI de webhook."""

from __future__ import annotations

import asyncio
import base64
import hashlib
import hmac
import json

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request

from messaging_api.routes import create_webhooks_router
from messaging_api.routes.webhooks import (
    create_line_webhook_router,
    create_messenger_webhook_router,
    create_telegram_webhook_router,
    create_viber_webhook_router,
)

LINE_SECRET = "line-secret"
APP_SECRET = "app-secret"
VIBER_TOKEN = "viber-token"


def _build_request(
    *,
    method: str,
    query_string: str = "",
    body: bytes = b"",
    headers: dict[str, str] | None = None,
) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": "/",
        "raw_path": b"/",
        "query_string": query_string.encode("utf-8"),
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def _endpoint(router: APIRouter, method: str):
    return next(route.endpoint for route in router.routes if method in route.methods)


def _line_signature(body: bytes) -> str:
    digest = hmac.new(LINE_SECRET.encode(), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


@pytest.mark.asyncio
async def test_line_receive_success_calls_handler() -> None:
    received: list[dict] = []
    router = create_line_webhook_router(LINE_SECRET, received.append, background=False)
    body = json.dumps({"destination": "U1", "events": [{"replyToken": "r"}]}).encode()

    request = _build_request(
        method="POST",
        body=body,
        headers={"X-Line-Signature": _line_signature(body), "X-Correlation-Id": "corr-1"},
    )
    response = await _endpoint(router, "POST")(request)

    assert response == {"status": "received", "correlation_id": "corr-1"}
    assert received == [{"destination": "U1", "events": [{"reply_token": "r"}]}]


@pytest.mark.asyncio
async def test_line_invalid_signature_returns_401() -> None:
    router = create_line_webhook_router(LINE_SECRET, lambda payload: None, background=False)
    request = _build_request(
        method="POST", body=b"{}", headers={"X-Line-Signature": _line_signature(b"x")}
    )

    response = await _endpoint(router, "POST")(request)

    assert response.status_code == 401
    assert response.body == b"Unauthorized"


@pytest.mark.asyncio
async def test_invalid_json_returns_400() -> None:
    router = create_telegram_webhook_router(None, lambda payload: None, background=False)
    request = _build_request(method="POST", body=b"{invalid")

    response = await _endpoint(router, "POST")(request)

    assert response.status_code == 400
    assert response.body == b"Bad Request"


@pytest.mark.asyncio
async def test_async_handler_is_awaited() -> None:
    received: list[dict] = []

    async def handler(payload: dict) -> None:
        received.append(payload)

    router = create_telegram_webhook_router("s3cret", handler, background=False)
    request = _build_request(
        method="POST",
        body=b'{"update_id": 10}',
        headers={"X-Telegram-Bot-Api-Secret-Token": "s3cret"},
    )

    response = await _endpoint(router, "POST")(request)

    assert response["status"] == "received"
    assert response["correlation_id"]
    assert received == [{"update_id": 10}]


@pytest.mark.asyncio
async def test_handler_failure_is_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    def handler(payload: dict) -> None:
        raise RuntimeError("boom")

    router = create_telegram_webhook_router(None, handler, background=False)
    request = _build_request(method="POST", body=b'{"update_id": 1}')

    with caplog.at_level("ERROR", logger="messaging_api.routes.webhooks"):
        response = await _endpoint(router, "POST")(request)

    assert response["status"] == "received"
    assert "webhook_processing_failed" in caplog.text


@pytest.mark.asyncio
async def test_background_handler_runs_after_response() -> None:
    done = asyncio.Event()

    async def handler(payload: dict) -> None:
        done.set()

    router = create_telegram_webhook_router(None, handler)
    request = _build_request(method="POST", body=b'{"update_id": 1}')

    response = await _endpoint(router, "POST")(request)
    await asyncio.wait_for(done.wait(), timeout=1)

    assert response["status"] == "received"


@pytest.mark.asyncio
async def test_viber_signature_is_checked() -> None:
    body = b'{"event": "webhook"}'
    signature = hmac.new(VIBER_TOKEN.encode(), body, hashlib.sha256).hexdigest()
    received: list[dict] = []
    router = create_viber_webhook_router(VIBER_TOKEN, received.append, background=False)

    request = _build_request(
        method="POST", body=body, headers={"X-Viber-Content-Signature": signature}
    )
    response = await _endpoint(router, "POST")(request)

    assert response["status"] == "received"
    assert received == [{"event": "webhook"}]


class TestMessengerRouter:
    """Testes para o router Messenger (challenge e POST assinado)."""

    def _router(self, received: list[dict]) -> APIRouter:
        return create_messenger_webhook_router(
            "token", APP_SECRET, received.append, background=False
        )

    @pytest.mark.asyncio
    async def test_verify_success(self) -> None:
        request = _build_request(
            method="GET",
            query_string="hub.mode=subscribe&hub.verify_token=token&hub.challenge=abc",
        )
        response = await _endpoint(self._router([]), "GET")(request)

        assert response.status_code == 200
        assert response.body == b"abc"

    @pytest.mark.asyncio
    async def test_verify_invalid_token(self) -> None:
        request = _build_request(
            method="GET",
            query_string="hub.mode=subscribe&hub.verify_token=wrong&hub.challenge=abc",
        )
        response = await _endpoint(self._router([]), "GET")(request)

        assert response.status_code == 403
        assert response.body == b"Forbidden"

    @pytest.mark.asyncio
    async def test_receive_signed_payload(self) -> None:
        received: list[dict] = []
        body = b'{"object": "page", "entry": []}'
        digest = hmac.new(APP_SECRET.encode(), body, hashlib.sha256).hexdigest()

        request = _build_request(
            method="POST", body=body, headers={"X-Hub-Signature-256": f"sha256={digest}"}
        )
        response = await _endpoint(self._router(received), "POST")(request)

        assert response["status"] == "received"
        assert received == [{"object": "page", "entry": []}]

    @pytest.mark.asyncio
    async def test_receive_unsigned_payload_rejected(self) -> None:
        request = _build_request(method="POST", body=b"{}")
        response = await _endpoint(self._router([]), "POST")(request)

        assert response.status_code == 401


class TestCreateWebhooksRouter:
    def test_unknown_channel_raises(self) -> None:
        with pytest.raises(ValueError, match="slack"):
            create_webhooks_router({"slack": lambda payload: None})

    def test_routes_are_mounted_per_channel(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LINE_CHANNEL_SECRET", LINE_SECRET)
        monkeypatch.setenv("MESSENGER_VERIFY_TOKEN", "token")

        app = FastAPI()
        app.include_router(
            create_webhooks_router(
                {"line": lambda payload: None, "messenger": lambda payload: None}
            )
        )
        client = TestClient(app)

        challenge = client.get(
            "/webhook/messenger/",
            params={"hub.mode": "subscribe", "hub.verify_token": "token", "hub.challenge": "42"},
        )
        assert challenge.status_code == 200
        assert challenge.text == "42"

        line = client.post(
            "/webhook/line/", content=b"{}", headers={"X-Line-Signature": "invalid"}
        )
        assert line.status_code == 401

        viber = client.post("/webhook/viber/", content=b"{}")
        assert viber.status_code == 404
