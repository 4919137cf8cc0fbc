"""Testes para BotFrameworkClient com httpx.MockTransport."""

from __future__ import annotations

import json
from urllib.parse import parse_qs

import httpx
import pytest

from messaging_api.common.errors import MessagingApiError
from messaging_api.common.request import RequestPayload
from messaging_api.connectors.botframework import (
    Activity,
    BotFrameworkClient,
    ChannelAccount,
)

SERVICE_URL = "https://smba.trafficmanager.net/br/"
TOKEN_URL = "https://login.microsoftonline.com/botframework.com/oauth2/v2.0/token"


class FakeConnector:
    def __init__(self) -> None:
        self.token_requests: list[httpx.Request] = []
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: object = {"id": "activity-1"}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == TOKEN_URL:
            self.token_requests.append(request)
            return httpx.Response(
                200, json={"token_type": "Bearer", "expires_in": 3600, "access_token": "JWT"}
            )
        self.requests.append(request)
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.body)


def _client(server: FakeConnector, **kwargs) -> BotFrameworkClient:
    return BotFrameworkClient(
        "APP_ID", "APP_SECRET", SERVICE_URL, transport=httpx.MockTransport(server), **kwargs
    )


@pytest.mark.asyncio
async def test_token_request_uses_client_credentials_form() -> None:
    server = FakeConnector()

    async with _client(server) as client:
        await client.send_to_conversation("CONV", {"type": "message", "text": "oi"})

    form = parse_qs(server.token_requests[0].content.decode())
    assert form == {
        "grant_type": ["client_credentials"],
        "client_id": ["APP_ID"],
        "client_secret": ["APP_SECRET"],
        "scope": ["https://api.botframework.com/.default"],
    }
    assert client.access_token == "JWT"


@pytest.mark.asyncio
async def test_calls_use_bearer_and_camel_case() -> None:
    server = FakeConnector()
    activity = Activity(
        text="Olá",
        from_=ChannelAccount(id="bot", name="Bot"),
        reply_to_id=None,
        text_format="plain",
    )

    async with _client(server) as client:
        result = await client.send_to_conversation("CONV", activity)

    request = server.requests[0]
    assert str(request.url) == (
        "https://smba.trafficmanager.net/br/v3/conversations/CONV/activities"
    )
    assert request.headers["authorization"] == "Bearer JWT"
    assert json.loads(request.content) == {
        "type": "message",
        "from": {"id": "bot", "name": "Bot"},
        "text": "Olá",
        "textFormat": "plain",
    }
    assert result == {"id": "activity-1"}


@pytest.mark.asyncio
async def test_token_is_cached_between_calls() -> None:
    server = FakeConnector()

    async with _client(server) as client:
        await client.get_conversation_members("CONV")
        await client.get_conversation_members("CONV")

    assert len(server.token_requests) == 1


@pytest.mark.asyncio
async def test_reply_to_activity_sets_reply_to_id() -> None:
    server = FakeConnector()

    async with _client(server) as client:
        await client.reply_to_activity("CONV", "ACT", {"text": "resposta"})

    request = server.requests[0]
    assert request.url.path == "/br/v3/conversations/CONV/activities/ACT"
    assert json.loads(request.content) == {"text": "resposta", "replyToId": "ACT"}


@pytest.mark.asyncio
async def test_create_conversation_returns_snake_case() -> None:
    server = FakeConnector()
    server.body = {"id": "CONV", "activityId": "A1", "serviceUrl": SERVICE_URL}

    async with _client(server) as client:
        result = await client.create_conversation(
            {"bot": {"id": "bot"}, "members": [{"id": "user"}], "is_group": False}
        )

    assert json.loads(server.requests[0].content)["isGroup"] is False
    assert result == {"id": "CONV", "activity_id": "A1", "service_url": SERVICE_URL}


@pytest.mark.asyncio
async def test_delete_activity_with_empty_body() -> None:
    server = FakeConnector()
    server.body = None

    async with _client(server) as client:
        assert await client.delete_activity("CONV", "ACT") == {}

    assert server.requests[0].method == "DELETE"


@pytest.mark.asyncio
async def test_error_response_is_formatted() -> None:
    server = FakeConnector()
    server.status_code = 404
    server.body = {"error": {"code": "ConversationNotFound", "message": "Conversation not found."}}

    async with _client(server) as client:
        with pytest.raises(MessagingApiError) as exc_info:
            await client.get_activity_members("CONV", "ACT")

    error = exc_info.value
    assert error.message == "Bot Framework API - ConversationNotFound Conversation not found."
    assert error.provider_code == "ConversationNotFound"


@pytest.mark.asyncio
async def test_invalid_credentials() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            401,
            json={"error": "invalid_client", "error_description": "AADSTS7000215: Invalid secret"},
        )

    async with BotFrameworkClient(
        "A", "S", SERVICE_URL, transport=httpx.MockTransport(handler)
    ) as client:
        with pytest.raises(MessagingApiError) as exc_info:
            await client.get_conversation_members("CONV")

    assert exc_info.value.message == (
        "Bot Framework API - invalid_client AADSTS7000215: Invalid secret"
    )


@pytest.mark.asyncio
async def test_on_request_redacts_client_secret() -> None:
    captured: list[RequestPayload] = []

    async with _client(FakeConnector(), on_request=captured.append) as client:
        await client.get_conversation_members("CONV")

    token_payload = captured[0]
    assert "APP_SECRET" not in token_payload.body
    assert "client_secret=***" in token_payload.body
    assert all("authorization" not in payload.headers for payload in captured)
