"""Cliente WeChat Official Account (mensagens de atendimento).

O access_token é obtido com AppID/AppSecret, mantido em cache e renovado
quando expira (``expires_in``).

Uso:
    async with WechatClient(app_id, app_secret) as client:
        await client.send_text(open_id, "你好")
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any

from messaging_api.common.api_logging import log_api_error, log_success
from messaging_api.common.case import snakecase_keys_deep
from messaging_api.common.models import to_payload
from messaging_api.config.settings.wechat import WECHAT_API_ORIGIN
from messaging_api.connectors.wechat.errors import has_error, parse_wechat_error
from messaging_api.infra.http import HttpClient, HttpClientConfig

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

    from messaging_api.common.request import RequestPayload
    from messaging_api.config.settings.wechat import WechatSettings
    from messaging_api.connectors.wechat.types import MiniProgramPage, Music, News, Video

logger = logging.getLogger(__name__)

PROVIDER = "wechat"

MEDIA_TYPES = frozenset({"image", "voice", "video", "thumb"})


class WechatClient(HttpClient):
    """Cliente da API de atendimento da WeChat."""

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        *,
        origin: str = WECHAT_API_ORIGIN,
        config: HttpClientConfig | None = None,
        on_request: Callable[[RequestPayload], Awaitable[None] | None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Inicializa cliente WeChat.

        Args:
            app_id: AppID da conta oficial
            app_secret: AppSecret da conta oficial
            origin: Origem da API
            config: Configuração HTTP (timeout, retries)
            on_request: Callback chamado com cada request de saída
            transport: Transporte httpx alternativo (ex: MockTransport)
        """
        super().__init__(
            f"{origin.rstrip('/')}/cgi-bin/",
            config=config,
            on_request=on_request,
            transport=transport,
        )
        self._app_id = app_id
        self._app_secret = app_secret
        self._access_token = ""
        self._token_expires_at = 0.0
        self._token_lock = asyncio.Lock()

    @property
    def access_token(self) -> str:
        return self._access_token

    async def _execute(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        response = await self.request(method, path, **kwargs)

        data: Any = None
        if "json" in response.headers.get("content-type", "") or response.content[:1] == b"{":
            try:
                data = response.json()
            except ValueError:
                data = None

        if response.is_error or has_error(data):
            error = parse_wechat_error(response, data)
            log_api_error(PROVIDER, error, method, path)
            raise error

        log_success(PROVIDER, method, path, response.status_code)
        return response

    async def get_access_token(self) -> dict[str, Any]:
        """Solicita novo token (``access_token``, ``expires_in``)."""
        response = await self._execute(
            "GET",
            "token",
            params={
                "grant_type": "client_credential",
                "appid": self._app_id,
                "secret": self._app_secret,
            },
        )
        return response.json()

    async def _refresh_token_when_expired(self) -> str:
        async with self._token_lock:
            if time.monotonic() >= self._token_expires_at:
                token = await self.get_access_token()
                self._access_token = token["access_token"]
                self._token_expires_at = time.monotonic() + float(token["expires_in"])
                logger.debug("wechat_token_refreshed", extra={"expires_in": token["expires_in"]})
        return self._access_token

    async def _call(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        token = await self._refresh_token_when_expired()
        return await self._execute(
            method, path, params={"access_token": token, **(params or {})}, **kwargs
        )

    # Mídia temporária

    async def upload_media(
        self,
        media_type: str,
        media: bytes,
        *,
        filename: str = "media",
        content_type: str = "application/octet-stream",
    ) -> dict[str, Any]:
        """Sobe mídia temporária (3 dias).

        Args:
            media_type: image, voice, video ou thumb
            media: Conteúdo do arquivo

        Returns:
            ``{"type", "media_id", "created_at"}``

        Raises:
            ValueError: Tipo de mídia desconhecido.
        """
        if media_type not in MEDIA_TYPES:
            raise ValueError(f"Tipo de mídia inválido: {media_type}")
        response = await self._call(
            "POST",
            "media/upload",
            params={"type": media_type},
            files={"media": (filename, media, content_type)},
        )
        return response.json()

    async def get_media(self, media_id: str) -> dict[str, Any] | bytes:
        """Baixa mídia temporária.

        Returns:
            ``{"video_url": ...}`` para vídeos; bytes para demais tipos.
        """
        response = await self._call("GET", "media/get", params={"media_id": media_id})
        if "json" in response.headers.get("content-type", ""):
            return response.json()
        return response.content

    # Mensagens de atendimento

    async def send_raw_body(self, body: dict[str, Any]) -> dict[str, Any]:
        response = await self._call(
            "POST", "message/custom/send", json=snakecase_keys_deep(body)
        )
        return response.json()

    async def _send(
        self, user_id: str, msgtype: str, content: Any, options: dict[str, Any]
    ) -> dict[str, Any]:
        return await self.send_raw_body(
            {"touser": user_id, "msgtype": msgtype, msgtype: content, **options}
        )

    async def send_text(self, user_id: str, text: str, **options: Any) -> dict[str, Any]:
        return await self._send(user_id, "text", {"content": text}, options)

    async def send_image(self, user_id: str, media_id: str, **options: Any) -> dict[str, Any]:
        return await self._send(user_id, "image", {"media_id": media_id}, options)

    async def send_voice(self, user_id: str, media_id: str, **options: Any) -> dict[str, Any]:
        return await self._send(user_id, "voice", {"media_id": media_id}, options)

    async def send_video(
        self, user_id: str, video: Video | dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self._send(user_id, "video", to_payload(video), options)

    async def send_music(
        self, user_id: str, music: Music | dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self._send(user_id, "music", to_payload(music), options)

    async def send_news(
        self, user_id: str, news: News | dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self._send(user_id, "news", to_payload(news), options)

    async def send_mpnews(self, user_id: str, media_id: str, **options: Any) -> dict[str, Any]:
        return await self._send(user_id, "mpnews", {"media_id": media_id}, options)

    async def send_msg_menu(
        self, user_id: str, msg_menu: dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        """Envia menu de opções (``head_content``, ``list``, ``tail_content``)."""
        return await self._send(user_id, "msgmenu", msg_menu, options)

    async def send_wx_card(self, user_id: str, card_id: str, **options: Any) -> dict[str, Any]:
        return await self._send(user_id, "wxcard", {"card_id": card_id}, options)

    async def send_mini_program_page(
        self,
        user_id: str,
        mini_program_page: MiniProgramPage | dict[str, Any],
        **options: Any,
    ) -> dict[str, Any]:
        return await self._send(
            user_id, "miniprogrampage", to_payload(mini_program_page), options
        )

    async def typing(self, user_id: str, command: str) -> dict[str, Any]:
        """Liga/desliga indicador de digitação (``Typing`` ou ``CancelTyping``)."""
        response = await self._call(
            "POST", "message/custom/typing", json={"touser": user_id, "command": command}
        )
        return response.json()


def create_wechat_client(
    settings: WechatSettings | None = None, **kwargs: object
) -> WechatClient:
    """Factory para criar cliente WeChat a partir das settings.

    Args:
        settings: WechatSettings opcional. Se None, carrega do ambiente.
        **kwargs: Repassados ao construtor (on_request, transport).

    Returns:
        Cliente configurado.
    """
    # Import local para evitar dependência circular
    from messaging_api.config.settings.wechat import get_wechat_settings

    wechat = settings or get_wechat_settings()
    config = HttpClientConfig(
        timeout_seconds=wechat.request_timeout_seconds,
        max_retries=wechat.max_retries,
    )
    return WechatClient(
        wechat.app_id,
        wechat.app_secret,
        origin=wechat.api_origin,
        config=config,
        **kwargs,
    )
