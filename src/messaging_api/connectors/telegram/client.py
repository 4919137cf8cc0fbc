"""Cliente Telegram Bot API.

Toda chamada é um POST JSON em ``<origin>/bot<token>/<método>``. O corpo
é convertido para snake_case e o campo ``result`` é devolvido.

Uso:
    async with TelegramClient(bot_token) as client:
        await client.send_message(chat_id, "Olá")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from messaging_api.common.api_logging import log_api_error, log_success
from messaging_api.common.case import snakecase_keys_deep
from messaging_api.config.settings.telegram import TELEGRAM_API_ORIGIN
from messaging_api.connectors.telegram.errors import parse_telegram_error
from messaging_api.infra.http import HttpClient, HttpClientConfig

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

    from messaging_api.common.request import RequestPayload
    from messaging_api.config.settings.telegram import TelegramSettings

logger = logging.getLogger(__name__)

PROVIDER = "telegram"

ChatId = int | str


def _without(options: dict[str, Any], *keys: str) -> dict[str, Any]:
    """Remove chaves de upload local, que este cliente não envia."""
    return {key: value for key, value in options.items() if key not in keys}


class TelegramClient(HttpClient):
    """Cliente da Telegram Bot API."""

    def __init__(
        self,
        bot_token: str,
        *,
        origin: str = TELEGRAM_API_ORIGIN,
        config: HttpClientConfig | None = None,
        on_request: Callable[[RequestPayload], Awaitable[None] | None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Inicializa cliente Telegram.

        Args:
            bot_token: Token do bot (BotFather)
            origin: Origem da Bot API
            config: Configuração HTTP (timeout, retries)
            on_request: Callback chamado com cada request de saída
            transport: Transporte httpx alternativo (ex: MockTransport)
        """
        self._origin = origin.rstrip("/")
        super().__init__(
            f"{self._origin}/bot{bot_token}/",
            config=config,
            on_request=on_request,
            transport=transport,
        )
        self._token = bot_token

    @property
    def access_token(self) -> str:
        return self._token

    async def _call(self, method: str, body: dict[str, Any] | None = None) -> Any:
        """Executa método da Bot API e devolve ``result``.

        Raises:
            MessagingApiError: Status de erro ou ``ok: false``.
        """
        payload = {key: value for key, value in (body or {}).items() if value is not None}
        response = await self.request("POST", method, json=snakecase_keys_deep(payload))

        data: Any = None
        if not response.is_error:
            try:
                data = response.json()
            except ValueError:
                data = None

        if response.is_error or not isinstance(data, dict) or not data.get("ok"):
            error = parse_telegram_error(response)
            log_api_error(PROVIDER, error, "POST", method)
            raise error

        log_success(PROVIDER, "POST", method, response.status_code)
        return data.get("result")

    # Updates e webhook

    async def get_updates(self, **options: Any) -> list[dict[str, Any]]:
        """Busca updates por long polling (``offset``, ``limit``, ``timeout``)."""
        return await self._call("getUpdates", options)

    async def get_webhook_info(self) -> dict[str, Any]:
        return await self._call("getWebhookInfo")

    async def set_webhook(self, url: str, **options: Any) -> bool:
        """Registra webhook. ``certificate`` é ignorado (upload não suportado)."""
        return await self._call("setWebhook", {"url": url, **_without(options, "certificate")})

    async def delete_webhook(self, **options: Any) -> bool:
        return await self._call("deleteWebhook", options)

    async def get_me(self) -> dict[str, Any]:
        return await self._call("getMe")

    # Envio

    async def send_message(self, chat_id: ChatId, text: str, **options: Any) -> dict[str, Any]:
        return await self._call("sendMessage", {"chat_id": chat_id, "text": text, **options})

    async def forward_message(
        self,
        chat_id: ChatId,
        from_chat_id: ChatId,
        message_id: int,
        **options: Any,
    ) -> dict[str, Any]:
        return await self._call(
            "forwardMessage",
            {
                "chat_id": chat_id,
                "from_chat_id": from_chat_id,
                "message_id": message_id,
                **options,
            },
        )

    async def send_photo(self, chat_id: ChatId, photo: str, **options: Any) -> dict[str, Any]:
        """Envia foto por file_id ou URL."""
        return await self._call("sendPhoto", {"chat_id": chat_id, "photo": photo, **options})

    async def send_audio(self, chat_id: ChatId, audio: str, **options: Any) -> dict[str, Any]:
        return await self._call(
            "sendAudio", {"chat_id": chat_id, "audio": audio, **_without(options, "thumb")}
        )

    async def send_document(
        self, chat_id: ChatId, document: str, **options: Any
    ) -> dict[str, Any]:
        return await self._call(
            "sendDocument",
            {"chat_id": chat_id, "document": document, **_without(options, "thumb")},
        )

    async def send_video(self, chat_id: ChatId, video: str, **options: Any) -> dict[str, Any]:
        return await self._call(
            "sendVideo", {"chat_id": chat_id, "video": video, **_without(options, "thumb")}
        )

    async def send_animation(
        self, chat_id: ChatId, animation: str, **options: Any
    ) -> dict[str, Any]:
        return await self._call(
            "sendAnimation",
            {"chat_id": chat_id, "animation": animation, **_without(options, "thumb")},
        )

    async def send_voice(self, chat_id: ChatId, voice: str, **options: Any) -> dict[str, Any]:
        return await self._call("sendVoice", {"chat_id": chat_id, "voice": voice, **options})

    async def send_video_note(
        self, chat_id: ChatId, video_note: str, **options: Any
    ) -> dict[str, Any]:
        return await self._call(
            "sendVideoNote",
            {"chat_id": chat_id, "video_note": video_note, **_without(options, "thumb")},
        )

    async def send_media_group(
        self,
        chat_id: ChatId,
        media: list[dict[str, Any]],
        **options: Any,
    ) -> list[dict[str, Any]]:
        """Envia álbum de fotos/vídeos (``thumb`` removido de cada item)."""
        return await self._call(
            "sendMediaGroup",
            {
                "chat_id": chat_id,
                "media": [_without(item, "thumb") for item in media],
                **options,
            },
        )

    async def send_location(
        self,
        chat_id: ChatId,
        latitude: float,
        longitude: float,
        **options: Any,
    ) -> dict[str, Any]:
        return await self._call(
            "sendLocation",
            {"chat_id": chat_id, "latitude": latitude, "longitude": longitude, **options},
        )

    async def edit_message_live_location(
        self, latitude: float, longitude: float, **options: Any
    ) -> dict[str, Any] | bool:
        """Atualiza live location (``chat_id``+``message_id`` ou ``inline_message_id``)."""
        return await self._call(
            "editMessageLiveLocation",
            {"latitude": latitude, "longitude": longitude, **options},
        )

    async def stop_message_live_location(self, **options: Any) -> dict[str, Any] | bool:
        return await self._call("stopMessageLiveLocation", options)

    async def send_venue(
        self,
        chat_id: ChatId,
        venue: dict[str, Any],
        **options: Any,
    ) -> dict[str, Any]:
        """Envia local (``latitude``, ``longitude``, ``title``, ``address``)."""
        return await self._call(
            "sendVenue",
            {
                "chat_id": chat_id,
                "latitude": venue["latitude"],
                "longitude": venue["longitude"],
                "title": venue["title"],
                "address": venue["address"],
                **options,
            },
        )

    async def send_contact(
        self,
        chat_id: ChatId,
        phone_number: str,
        first_name: str,
        **options: Any,
    ) -> dict[str, Any]:
        return await self._call(
            "sendContact",
            {
                "chat_id": chat_id,
                "phone_number": phone_number,
                "first_name": first_name,
                **options,
            },
        )

    async def send_poll(
        self,
        chat_id: ChatId,
        question: str,
        poll_options: list[str],
        **options: Any,
    ) -> dict[str, Any]:
        return await self._call(
            "sendPoll",
            {"chat_id": chat_id, "question": question, "options": poll_options, **options},
        )

    async def stop_poll(self, chat_id: ChatId, message_id: int, **options: Any) -> dict[str, Any]:
        return await self._call(
            "stopPoll", {"chat_id": chat_id, "message_id": message_id, **options}
        )

    async def send_chat_action(self, chat_id: ChatId, action: str) -> bool:
        """Exibe ação (``typing``, ``upload_photo``...) para o usuário."""
        return await self._call("sendChatAction", {"chat_id": chat_id, "action": action})

    # Usuários e arquivos

    async def get_user_profile_photos(self, user_id: int, **options: Any) -> dict[str, Any]:
        return await self._call("getUserProfilePhotos", {"user_id": user_id, **options})

    async def get_file(self, file_id: str) -> dict[str, Any]:
        return await self._call("getFile", {"file_id": file_id})

    async def get_file_link(self, file_id: str) -> str:
        """Monta URL de download do arquivo (contém o token do bot)."""
        file = await self.get_file(file_id)
        return f"{self._origin}/file/bot{self._token}/{file['file_path']}"

    # Administração de chats

    async def kick_chat_member(self, chat_id: ChatId, user_id: int, **options: Any) -> bool:
        return await self._call(
            "kickChatMember", {"chat_id": chat_id, "user_id": user_id, **options}
        )

    async def unban_chat_member(self, chat_id: ChatId, user_id: int) -> bool:
        return await self._call("unbanChatMember", {"chat_id": chat_id, "user_id": user_id})

    async def restrict_chat_member(
        self,
        chat_id: ChatId,
        user_id: int,
        permissions: dict[str, Any],
        **options: Any,
    ) -> bool:
        return await self._call(
            "restrictChatMember",
            {"chat_id": chat_id, "user_id": user_id, "permissions": permissions, **options},
        )

    async def promote_chat_member(self, chat_id: ChatId, user_id: int, **options: Any) -> bool:
        return await self._call(
            "promoteChatMember", {"chat_id": chat_id, "user_id": user_id, **options}
        )

    async def set_chat_permissions(self, chat_id: ChatId, permissions: dict[str, Any]) -> bool:
        return await self._call(
            "setChatPermissions", {"chat_id": chat_id, "permissions": permissions}
        )

    async def export_chat_invite_link(self, chat_id: ChatId) -> str:
        return await self._call("exportChatInviteLink", {"chat_id": chat_id})

    async def delete_chat_photo(self, chat_id: ChatId) -> bool:
        return await self._call("deleteChatPhoto", {"chat_id": chat_id})

    async def set_chat_title(self, chat_id: ChatId, title: str) -> bool:
        return await self._call("setChatTitle", {"chat_id": chat_id, "title": title})

    async def set_chat_description(self, chat_id: ChatId, description: str) -> bool:
        return await self._call(
            "setChatDescription", {"chat_id": chat_id, "description": description}
        )

    async def pin_chat_message(self, chat_id: ChatId, message_id: int, **options: Any) -> bool:
        return await self._call(
            "pinChatMessage", {"chat_id": chat_id, "message_id": message_id, **options}
        )

    async def unpin_chat_message(self, chat_id: ChatId) -> bool:
        return await self._call("unpinChatMessage", {"chat_id": chat_id})

    async def leave_chat(self, chat_id: ChatId) -> bool:
        return await self._call("leaveChat", {"chat_id": chat_id})

    async def get_chat(self, chat_id: ChatId) -> dict[str, Any]:
        return await self._call("getChat", {"chat_id": chat_id})

    async def get_chat_administrators(self, chat_id: ChatId) -> list[dict[str, Any]]:
        return await self._call("getChatAdministrators", {"chat_id": chat_id})

    async def get_chat_members_count(self, chat_id: ChatId) -> int:
        return await self._call("getChatMembersCount", {"chat_id": chat_id})

    async def get_chat_member(self, chat_id: ChatId, user_id: int) -> dict[str, Any]:
        return await self._call("getChatMember", {"chat_id": chat_id, "user_id": user_id})

    async def set_chat_sticker_set(self, chat_id: ChatId, sticker_set_name: str) -> bool:
        return await self._call(
            "setChatStickerSet", {"chat_id": chat_id, "sticker_set_name": sticker_set_name}
        )

    async def delete_chat_sticker_set(self, chat_id: ChatId) -> bool:
        return await self._call("deleteChatStickerSet", {"chat_id": chat_id})

    # Callbacks e edição

    async def answer_callback_query(self, callback_query_id: str, **options: Any) -> bool:
        return await self._call(
            "answerCallbackQuery", {"callback_query_id": callback_query_id, **options}
        )

    async def edit_message_text(self, text: str, **options: Any) -> dict[str, Any] | bool:
        return await self._call("editMessageText", {"text": text, **options})

    async def edit_message_caption(self, caption: str, **options: Any) -> dict[str, Any] | bool:
        return await self._call("editMessageCaption", {"caption": caption, **options})

    async def edit_message_reply_markup(
        self, reply_markup: dict[str, Any], **options: Any
    ) -> dict[str, Any] | bool:
        return await self._call(
            "editMessageReplyMarkup", {"reply_markup": reply_markup, **options}
        )

    async def delete_message(self, chat_id: ChatId, message_id: int) -> bool:
        return await self._call(
            "deleteMessage", {"chat_id": chat_id, "message_id": message_id}
        )

    # Stickers

    async def send_sticker(self, chat_id: ChatId, sticker: str, **options: Any) -> dict[str, Any]:
        return await self._call(
            "sendSticker", {"chat_id": chat_id, "sticker": sticker, **options}
        )

    async def get_sticker_set(self, name: str) -> dict[str, Any]:
        return await self._call("getStickerSet", {"name": name})

    # Inline, pagamentos e jogos

    async def answer_inline_query(
        self,
        inline_query_id: str,
        results: list[dict[str, Any]],
        **options: Any,
    ) -> bool:
        return await self._call(
            "answerInlineQuery",
            {"inline_query_id": inline_query_id, "results": results, **options},
        )

    async def send_invoice(
        self, chat_id: ChatId, product: dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        """Envia fatura.

        Args:
            chat_id: Chat de destino
            product: ``title``, ``description``, ``payload``, ``provider_token``,
                ``start_parameter``, ``currency`` e ``prices``
            **options: Campos opcionais da Bot API
        """
        return await self._call("sendInvoice", {"chat_id": chat_id, **product, **options})

    async def answer_shipping_query(
        self, shipping_query_id: str, ok: bool, **options: Any
    ) -> bool:
        return await self._call(
            "answerShippingQuery",
            {"shipping_query_id": shipping_query_id, "ok": ok, **options},
        )

    async def answer_pre_checkout_query(
        self, pre_checkout_query_id: str, ok: bool, **options: Any
    ) -> bool:
        return await self._call(
            "answerPreCheckoutQuery",
            {"pre_checkout_query_id": pre_checkout_query_id, "ok": ok, **options},
        )

    async def send_game(
        self, chat_id: ChatId, game_short_name: str, **options: Any
    ) -> dict[str, Any]:
        return await self._call(
            "sendGame", {"chat_id": chat_id, "game_short_name": game_short_name, **options}
        )

    async def set_game_score(
        self, user_id: int, score: int, **options: Any
    ) -> dict[str, Any] | bool:
        return await self._call("setGameScore", {"user_id": user_id, "score": score, **options})

    async def get_game_high_scores(self, user_id: int, **options: Any) -> list[dict[str, Any]]:
        return await self._call("getGameHighScores", {"user_id": user_id, **options})


def create_telegram_client(
    settings: TelegramSettings | None = None, **kwargs: object
) -> TelegramClient:
    """Factory para criar cliente Telegram a partir das settings.

    Args:
        settings: TelegramSettings opcional. Se None, carrega do ambiente.
        **kwargs: Repassados ao construtor (on_request, transport).

    Returns:
        Cliente configurado.
    """
    # Import local para evitar dependência circular
    from messaging_api.config.settings.telegram import get_telegram_settings

    telegram = settings or get_telegram_settings()
    config = HttpClientConfig(
        timeout_seconds=telegram.request_timeout_seconds,
        max_retries=telegram.max_retries,
    )
    return TelegramClient(
        telegram.bot_token,
        origin=telegram.api_origin,
        config=config,
        **kwargs,
    )
