"""Testes para WechatClient com httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from messaging_api.common.errors import MessagingApiError
from messaging_api.connectors.wechat import Music, WechatClient


class FakeWechat:
    """Servidor falso: emite tokens e registra as chamadas autenticadas."""

    def __init__(self, expires_in: int = 7200) -> None:
        self.expires_in = expires_in
        self.token_requests: list[httpx.Request] = []
        self.requests: list[httpx.Request] = []
        self.reply: dict = {"errcode": 0, "errmsg": "ok"}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/cgi-bin/token":
            self.token_requests.append(request)
            token = f"TOKEN_{len(self.token_requests)}"
            return httpx.Response(
                200, json={"access_token": token, "expires_in": self.expires_in}
            )
        self.requests.append(request)
        return httpx.Response(200, json=self.reply)


def _client(server: FakeWechat) -> WechatClient:
    return WechatClient("APPID", "APPSECRET", transport=httpx.MockTransport(server))


@pytest.mark.asyncio
async def test_access_token_is_fetched_once_and_cached() -> None:
    server = FakeWechat()

    async with _client(server) as client:
        await client.send_text("OPENID", "你好")
        await client.send_text("OPENID", "再见")

    assert len(server.token_requests) == 1
    params = server.token_requests[0].url.params
    assert params["grant_type"] == "client_credential"
    assert params["appid"] == "APPID"
    assert params["secret"] == "APPSECRET"
    assert all(r.url.params["access_token"] == "TOKEN_1" for r in server.requests)


@pytest.mark.asyncio
async def test_expired_token_is_refreshed() -> None:
    server = FakeWechat(expires_in=0)

    async with _client(server) as client:
        await client.send_text("OPENID", "a")
        await client.send_text("OPENID", "b")

    assert len(server.token_requests) == 2
    assert client.access_token == "TOKEN_2"


@pytest.mark.asyncio
async def test_send_text_body() -> None:
    server = FakeWechat()

    async with _client(server) as client:
        await client.send_text("OPENID", "Hello")

    request = server.requests[0]
    assert request.url.path == "/cgi-bin/message/custom/send"
    assert json.loads(request.content) == {
        "touser": "OPENID",
        "msgtype": "text",
        "text": {"content": "Hello"},
    }


@pytest.mark.asyncio
async def test_send_music_accepts_model() -> None:
    server = FakeWechat()
    music = Music(musicurl="https://m", hqmusicurl="https://hq", thumb_media_id="T")

    async with _client(server) as client:
        await client.send_music("OPENID", music)

    body = json.loads(server.requests[0].content)
    assert body["music"] == {"musicurl": "https://m", "hqmusicurl": "https://hq", "thumb_media_id": "T"}


@pytest.mark.asyncio
async def test_errcode_raises() -> None:
    server = FakeWechat()
    server.reply = {"errcode": 40003, "errmsg": "invalid openid"}

    async with _client(server) as client:
        with pytest.raises(MessagingApiError) as exc_info:
            await client.send_text("BAD", "oi")

    error = exc_info.value
    assert error.message == "WeChat API - 40003 invalid openid"
    assert error.provider_code == 40003
    assert error.is_retryable is False


@pytest.mark.asyncio
async def test_busy_errcode_is_retryable() -> None:
    server = FakeWechat()
    server.reply = {"errcode": -1, "errmsg": "system error"}

    async with _client(server) as client:
        with pytest.raises(MessagingApiError) as exc_info:
            await client.typing("OPENID", "Typing")

    assert exc_info.value.is_retryable is True


@pytest.mark.asyncio
async def test_upload_media_sends_multipart() -> None:
    server = FakeWechat()
    server.reply = {"type": "image", "media_id": "MEDIA", "created_at": 1}

    async with _client(server) as client:
        result = await client.upload_media("image", b"\xff\xd8\xff", filename="a.jpg")

    request = server.requests[0]
    assert request.url.path == "/cgi-bin/media/upload"
    assert request.url.params["type"] == "image"
    assert b'name="media"; filename="a.jpg"' in request.content
    assert result["media_id"] == "MEDIA"


@pytest.mark.asyncio
async def test_upload_media_rejects_unknown_type() -> None:
    async with _client(FakeWechat()) as client:
        with pytest.raises(ValueError):
            await client.upload_media("gif", b"")


@pytest.mark.asyncio
async def test_get_media_returns_bytes() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/cgi-bin/token":
            return httpx.Response(200, json={"access_token": "T", "expires_in": 7200})
        return httpx.Response(200, content=b"\x00binary", headers={"content-type": "image/jpeg"})

    async with WechatClient("A", "S", transport=httpx.MockTransport(handler)) as client:
        assert await client.get_media("MEDIA") == b"\x00binary"


@pytest.mark.asyncio
async def test_invalid_credentials_raise_on_token_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"errcode": 40013, "errmsg": "invalid appid"})

    async with WechatClient("A", "S", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(MessagingApiError, match="40013 invalid appid"):
            await client.send_text("OPENID", "oi")
