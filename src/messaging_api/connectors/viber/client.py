"""Cliente Viber REST Bot API.

Chaves do corpo ficam em snake_case no nível superior; ``keyboard`` e
``rich_media`` vão em PascalCase profundo, único formato aceito pela Viber.

Uso:
    async with ViberClient(auth_token, Sender(name="Bot")) as client:
        await client.send_text(user_id, "Olá")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from messaging_api.common.api_logging import log_api_error, log_success
from messaging_api.common.case import pascalcase_keys_deep, snakecase_keys
from messaging_api.common.models import compact, to_payload
from messaging_api.config.settings.viber import VIBER_API_ORIGIN
from messaging_api.connectors.viber.errors import parse_viber_error
from messaging_api.connectors.viber.types import Sender
from messaging_api.infra.crypto.signature import verify_viber_signature
from messaging_api.infra.http import HttpClient, HttpClientConfig

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

    from messaging_api.common.request import RequestPayload
    from messaging_api.config.settings.viber import ViberSettings
    from messaging_api.connectors.viber.types import (
        Contact,
        File,
        Location,
        Picture,
        Video,
    )

logger = logging.getLogger(__name__)

PROVIDER = "viber"

PASCAL_CASE_FIELDS = ("keyboard", "rich_media")


def transform_message_case(message: dict[str, Any]) -> dict[str, Any]:
    """Aplica snake_case no topo e PascalCase em keyboard/rich_media."""
    body = snakecase_keys(message)
    for field in PASCAL_CASE_FIELDS:
        if body.get(field) is not None:
            body[field] = pascalcase_keys_deep(body[field])
    return body


class ViberClient(HttpClient):
    """Cliente da Viber REST Bot API."""

    def __init__(
        self,
        auth_token: str,
        sender: Sender | dict[str, Any] | None = None,
        *,
        origin: str = VIBER_API_ORIGIN,
        config: HttpClientConfig | None = None,
        on_request: Callable[[RequestPayload], Awaitable[None] | None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Inicializa cliente Viber.

        Args:
            auth_token: Token do bot (X-Viber-Auth-Token)
            sender: Remetente padrão das mensagens (name, avatar)
            origin: Origem da API
            config: Configuração HTTP (timeout, retries)
            on_request: Callback chamado com cada request de saída
            transport: Transporte httpx alternativo (ex: MockTransport)
        """
        super().__init__(
            f"{origin.rstrip('/')}/pa/",
            headers={"X-Viber-Auth-Token": auth_token},
            config=config,
            on_request=on_request,
            transport=transport,
        )
        self._token = auth_token
        self._sender = to_payload(sender)

    @property
    def access_token(self) -> str:
        return self._token

    @property
    def sender(self) -> dict[str, Any]:
        return dict(self._sender)

    def verify_signature(self, body: bytes | str, signature: str | None) -> bool:
        """Valida X-Viber-Content-Signature com o auth token."""
        return verify_viber_signature(body, self._token, signature)

    async def _call(self, path: str, body: dict[str, Any] | None = None) -> dict[str, Any]:
        """Executa chamada e devolve o corpo (``status == 0``).

        Raises:
            MessagingApiError: Status HTTP de erro ou ``status != 0``.
        """
        response = await self.request("POST", path, json=transform_message_case(body or {}))

        data: Any = None
        if response.content:
            try:
                data = response.json()
            except ValueError:
                data = None

        if response.is_error or not isinstance(data, dict) or data.get("status") != 0:
            error = parse_viber_error(response, data)
            log_api_error(PROVIDER, error, "POST", path)
            raise error

        log_success(PROVIDER, "POST", path, response.status_code)
        return data

    # Webhook

    async def set_webhook(
        self,
        url: str,
        event_types: list[str] | None = None,
        **options: Any,
    ) -> dict[str, Any]:
        """Registra webhook.

        Args:
            url: URL HTTPS do webhook (vazia remove)
            event_types: Eventos assinados (ex: ``delivered``, ``seen``)
            **options: ``send_name``, ``send_photo``
        """
        return await self._call(
            "set_webhook", compact({"url": url, "event_types": event_types, **options})
        )

    async def remove_webhook(self) -> dict[str, Any]:
        return await self.set_webhook("")

    # Envio direto

    async def send_message(self, receiver: str, message: dict[str, Any]) -> dict[str, Any]:
        """Envia mensagem a um usuário. Retorna ``message_token``."""
        return await self._call(
            "send_message", {"receiver": receiver, "sender": self._sender, **compact(message)}
        )

    async def send_text(self, receiver: str, text: str, **options: Any) -> dict[str, Any]:
        return await self.send_message(receiver, _text(text, options))

    async def send_picture(
        self, receiver: str, picture: Picture | dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self.send_message(receiver, _picture(picture, options))

    async def send_video(
        self, receiver: str, video: Video | dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self.send_message(receiver, _video(video, options))

    async def send_file(
        self, receiver: str, file: File | dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self.send_message(receiver, _file(file, options))

    async def send_contact(
        self, receiver: str, contact: Contact | dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self.send_message(receiver, _contact(contact, options))

    async def send_location(
        self, receiver: str, location: Location | dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self.send_message(receiver, _location(location, options))

    async def send_url(self, receiver: str, url: str, **options: Any) -> dict[str, Any]:
        return await self.send_message(receiver, _url(url, options))

    async def send_sticker(self, receiver: str, sticker_id: int, **options: Any) -> dict[str, Any]:
        return await self.send_message(receiver, _sticker(sticker_id, options))

    async def send_carousel_content(
        self, receiver: str, rich_media: dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        """Envia carrossel (rich media). Exige ``min_api_version`` 2."""
        return await self.send_message(receiver, _carousel(rich_media, options))

    # Broadcast

    async def broadcast_message(
        self, broadcast_list: list[str], message: dict[str, Any]
    ) -> dict[str, Any]:
        """Envia a até 300 usuários. Retorna ``failed_list``."""
        return await self._call(
            "broadcast_message",
            {"broadcast_list": broadcast_list, "sender": self._sender, **compact(message)},
        )

    async def broadcast_text(
        self, broadcast_list: list[str], text: str, **options: Any
    ) -> dict[str, Any]:
        return await self.broadcast_message(broadcast_list, _text(text, options))

    async def broadcast_picture(
        self, broadcast_list: list[str], picture: Picture | dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self.broadcast_message(broadcast_list, _picture(picture, options))

    async def broadcast_video(
        self, broadcast_list: list[str], video: Video | dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self.broadcast_message(broadcast_list, _video(video, options))

    async def broadcast_file(
        self, broadcast_list: list[str], file: File | dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self.broadcast_message(broadcast_list, _file(file, options))

    async def broadcast_contact(
        self, broadcast_list: list[str], contact: Contact | dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self.broadcast_message(broadcast_list, _contact(contact, options))

    async def broadcast_location(
        self, broadcast_list: list[str], location: Location | dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self.broadcast_message(broadcast_list, _location(location, options))

    async def broadcast_url(
        self, broadcast_list: list[str], url: str, **options: Any
    ) -> dict[str, Any]:
        return await self.broadcast_message(broadcast_list, _url(url, options))

    async def broadcast_sticker(
        self, broadcast_list: list[str], sticker_id: int, **options: Any
    ) -> dict[str, Any]:
        return await self.broadcast_message(broadcast_list, _sticker(sticker_id, options))

    async def broadcast_carousel_content(
        self, broadcast_list: list[str], rich_media: dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self.broadcast_message(broadcast_list, _carousel(rich_media, options))

    # Conta e usuários

    async def get_account_info(self) -> dict[str, Any]:
        return await self._call("get_account_info")

    async def get_user_details(self, user_id: str) -> dict[str, Any]:
        response = await self._call("get_user_details", {"id": user_id})
        return response["user"]

    async def get_online_status(self, user_ids: list[str]) -> list[dict[str, Any]]:
        response = await self._call("get_online", {"ids": user_ids})
        return response["users"]


def _text(text: str, options: dict[str, Any]) -> dict[str, Any]:
    return {"type": "text", "text": text, **options}


def _picture(picture: Picture | dict[str, Any], options: dict[str, Any]) -> dict[str, Any]:
    content = to_payload(picture)
    return {
        "type": "picture",
        "text": content.get("text", ""),
        "media": content["media"],
        "thumbnail": content.get("thumbnail"),
        **options,
    }


def _video(video: Video | dict[str, Any], options: dict[str, Any]) -> dict[str, Any]:
    content = to_payload(video)
    return {
        "type": "video",
        "media": content["media"],
        "size": content["size"],
        "thumbnail": content.get("thumbnail"),
        "duration": content.get("duration"),
        **options,
    }


def _file(file: File | dict[str, Any], options: dict[str, Any]) -> dict[str, Any]:
    return {"type": "file", **to_payload(file), **options}


def _contact(contact: Contact | dict[str, Any], options: dict[str, Any]) -> dict[str, Any]:
    return {"type": "contact", "contact": to_payload(contact), **options}


def _location(location: Location | dict[str, Any], options: dict[str, Any]) -> dict[str, Any]:
    content = to_payload(location)
    return {
        "type": "location",
        "location": {"lat": content["lat"], "lon": content["lon"]},
        **options,
    }


def _url(url: str, options: dict[str, Any]) -> dict[str, Any]:
    return {"type": "url", "media": url, **options}


def _sticker(sticker_id: int, options: dict[str, Any]) -> dict[str, Any]:
    return {"type": "sticker", "sticker_id": sticker_id, **options}


def _carousel(rich_media: dict[str, Any], options: dict[str, Any]) -> dict[str, Any]:
    return {"type": "rich_media", "min_api_version": 2, "rich_media": rich_media, **options}


def create_viber_client(
    settings: ViberSettings | None = None, **kwargs: object
) -> ViberClient:
    """Factory para criar cliente Viber a partir das settings.

    Args:
        settings: ViberSettings opcional. Se None, carrega do ambiente.
        **kwargs: Repassados ao construtor (on_request, transport).

    Returns:
        Cliente configurado.
    """
    # Import local para evitar dependência circular
    from messaging_api.config.settings.viber import get_viber_settings

    viber = settings or get_viber_settings()
    config = HttpClientConfig(
        timeout_seconds=viber.request_timeout_seconds,
        max_retries=viber.max_retries,
    )
    sender = Sender(name=viber.sender_name, avatar=viber.sender_avatar or None)
    return ViberClient(
        viber.auth_token,
        sender,
        origin=viber.api_origin,
        config=config,
        **kwargs,
    )
