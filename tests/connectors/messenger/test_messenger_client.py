"""Testes para MessengerClient com httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from messaging_api.common.errors import MessagingApiError
from messaging_api.connectors.messenger import MessengerClient
from messaging_api.infra.crypto.signature import compute_appsecret_proof

TOKEN = "PAGE_TOKEN"
APP_SECRET = "APP_SECRET"


def _client(handler, **kwargs) -> MessengerClient:
    return MessengerClient(TOKEN, transport=httpx.MockTransport(handler), **kwargs)


def _recording_handler(seen: list[httpx.Request], body: object = None):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=body if body is not None else {})

    return handler


def test_app_secret_required_when_proof_enabled() -> None:
    with pytest.raises(ValueError):
        MessengerClient(TOKEN, skip_app_secret_proof=False)


def test_version_prefix_is_stripped() -> None:
    client = MessengerClient(TOKEN, version="v12.0")
    assert client.version == "12.0"
    assert client.base_url == "https://graph.facebook.com/v12.0/"


@pytest.mark.asyncio
async def test_send_text_adds_messaging_type_and_token() -> None:
    seen: list[httpx.Request] = []
    handler = _recording_handler(seen, {"recipient_id": "PSID", "message_id": "mid.1"})

    async with _client(handler) as client:
        result = await client.send_text("PSID", "Olá")

    request = seen[0]
    assert request.url.path == "/v6.0/me/messages"
    assert request.url.params["access_token"] == TOKEN
    assert "appsecret_proof" not in request.url.params
    assert json.loads(request.content) == {
        "messaging_type": "UPDATE",
        "recipient": {"id": "PSID"},
        "message": {"text": "Olá"},
    }
    assert result["message_id"] == "mid.1"


@pytest.mark.asyncio
async def test_tag_switches_messaging_type() -> None:
    seen: list[httpx.Request] = []

    async with _client(_recording_handler(seen)) as client:
        await client.send_text("PSID", "Lembrete", tag="CONFIRMED_EVENT_UPDATE")

    body = json.loads(seen[0].content)
    assert body["messaging_type"] == "MESSAGE_TAG"
    assert body["tag"] == "CONFIRMED_EVENT_UPDATE"


@pytest.mark.asyncio
async def test_appsecret_proof_is_sent_with_app_secret() -> None:
    seen: list[httpx.Request] = []

    async with _client(_recording_handler(seen), app_secret=APP_SECRET) as client:
        await client.mark_seen("PSID")

    assert seen[0].url.params["appsecret_proof"] == compute_appsecret_proof(TOKEN, APP_SECRET)
    assert json.loads(seen[0].content) == {
        "recipient": {"id": "PSID"},
        "sender_action": "mark_seen",
    }


@pytest.mark.asyncio
async def test_send_image_bytes_uses_multipart() -> None:
    seen: list[httpx.Request] = []

    async with _client(_recording_handler(seen)) as client:
        await client.send_image("PSID", b"\x89PNG", filename="a.png", content_type="image/png")

    request = seen[0]
    assert request.headers["content-type"].startswith("multipart/form-data")
    assert b'name="filedata"; filename="a.png"' in request.content
    assert b'"type": "image"' in request.content


@pytest.mark.asyncio
async def test_graph_error_is_formatted() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={
                "error": {
                    "message": "Invalid OAuth access token.",
                    "type": "OAuthException",
                    "code": 190,
                }
            },
        )

    async with _client(handler) as client:
        with pytest.raises(MessagingApiError) as exc_info:
            await client.send_text("PSID", "oi")

    error = exc_info.value
    assert error.message == "Messenger API - 190 OAuthException Invalid OAuth access token."
    assert error.provider_code == 190
    assert error.is_retryable is False


@pytest.mark.asyncio
async def test_rate_limit_error_is_retryable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={"error": {"message": "Too many calls", "type": "OAuthException", "code": 4}},
        )

    async with _client(handler) as client:
        with pytest.raises(MessagingApiError) as exc_info:
            await client.send_text("PSID", "oi")

    assert exc_info.value.is_retryable is True


@pytest.mark.asyncio
async def test_send_batch_encodes_items_and_decodes_bodies() -> None:
    seen: list[httpx.Request] = []
    responses = [
        {"code": 200, "headers": [], "body": json.dumps({"recipient_id": "1", "message_id": "m"})},
        None,
    ]

    async with _client(_recording_handler(seen, responses)) as client:
        result = await client.send_batch(
            [
                {
                    "method": "POST",
                    "relative_url": "me/messages",
                    "body": {"recipient": {"id": "1"}, "message": {"text": "a"}},
                    "response_access_path": "message_id",
                },
                {"method": "GET", "relative_url": "me"},
            ]
        )

    body = json.loads(seen[0].content)
    assert seen[0].url.path == "/v6.0/"
    assert "access_token" not in body
    assert seen[0].url.params["access_token"] == TOKEN
    assert body["include_headers"] is True
    assert body["batch"][0]["body"] == (
        "recipient=%7B%22id%22%3A+%221%22%7D&message=%7B%22text%22%3A+%22a%22%7D"
    )
    assert "response_access_path" not in body["batch"][0]
    assert result[0]["body"] == "m"
    assert result[1] is None


@pytest.mark.asyncio
async def test_send_batch_signs_items_with_own_token() -> None:
    seen: list[httpx.Request] = []

    async with _client(_recording_handler(seen, []), app_secret=APP_SECRET) as client:
        await client.send_batch(
            [{"method": "GET", "relative_url": "me?access_token=OTHER"}]
        )

    relative_url = json.loads(seen[0].content)["batch"][0]["relative_url"]
    proof = compute_appsecret_proof("OTHER", APP_SECRET)
    assert relative_url == f"me?access_token=OTHER&appsecret_proof={proof}"


@pytest.mark.asyncio
async def test_send_batch_rejects_more_than_fifty_items() -> None:
    async with _client(_recording_handler([])) as client:
        with pytest.raises(ValueError):
            await client.send_batch([{"method": "GET", "relative_url": "me"}] * 51)


@pytest.mark.asyncio
async def test_set_persistent_menu_wraps_items() -> None:
    seen: list[httpx.Request] = []
    items = [{"type": "postback", "title": "Ajuda", "payload": "HELP"}]

    async with _client(_recording_handler(seen, {"result": "success"})) as client:
        await client.set_persistent_menu(items)

    assert seen[0].url.path == "/v6.0/me/messenger_profile"
    assert json.loads(seen[0].content) == {
        "persistent_menu": [
            {"locale": "default", "composer_input_disabled": False, "call_to_actions": items}
        ]
    }


@pytest.mark.asyncio
async def test_set_greeting_from_string() -> None:
    seen: list[httpx.Request] = []

    async with _client(_recording_handler(seen, {"result": "success"})) as client:
        await client.set_greeting("Bem-vindo!")

    assert json.loads(seen[0].content) == {
        "greeting": [{"locale": "default", "text": "Bem-vindo!"}]
    }


@pytest.mark.asyncio
async def test_get_persistent_menu_reads_first_entry() -> None:
    menu = [{"locale": "default", "call_to_actions": []}]
    seen: list[httpx.Request] = []

    async with _client(_recording_handler(seen, {"data": [{"persistent_menu": menu}]})) as client:
        assert await client.get_persistent_menu() == menu

    assert seen[0].url.params["fields"] == "persistent_menu"


@pytest.mark.asyncio
async def test_get_greeting_returns_none_when_unset() -> None:
    async with _client(_recording_handler([], {"data": []})) as client:
        assert await client.get_greeting() is None


@pytest.mark.asyncio
async def test_debug_token_uses_app_token() -> None:
    seen: list[httpx.Request] = []
    body = {"data": {"is_valid": True, "app_id": "APP"}}

    async with _client(
        _recording_handler(seen, body), app_id="APP", app_secret=APP_SECRET
    ) as client:
        result = await client.debug_token()

    assert result == {"is_valid": True, "app_id": "APP"}
    params = seen[0].url.params
    assert params["access_token"] == f"APP|{APP_SECRET}"
    assert params["input_token"] == TOKEN


@pytest.mark.asyncio
async def test_debug_token_requires_app_id() -> None:
    async with _client(_recording_handler([])) as client:
        with pytest.raises(ValueError):
            await client.debug_token()


@pytest.mark.asyncio
async def test_pass_thread_control_to_page_inbox() -> None:
    seen: list[httpx.Request] = []

    async with _client(_recording_handler(seen, {"success": True})) as client:
        await client.pass_thread_control_to_page_inbox("PSID")

    assert json.loads(seen[0].content) == {
        "recipient": {"id": "PSID"},
        "target_app_id": 263902037430900,
    }


@pytest.mark.asyncio
async def test_get_user_field_requires_app_secret() -> None:
    async with _client(_recording_handler([])) as client:
        with pytest.raises(ValueError):
            await client.get_ids_for_apps("PSID")


@pytest.mark.asyncio
async def test_send_batch_does_not_expose_token_to_on_request() -> None:
    payloads = []

    async with _client(
        _recording_handler([], []), on_request=payloads.append
    ) as client:
        await client.send_batch([{"method": "GET", "relative_url": "me"}])

    assert "access_token=***" in payloads[0].url
    assert TOKEN not in json.dumps(payloads[0].body)
