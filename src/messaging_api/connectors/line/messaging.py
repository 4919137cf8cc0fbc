"""Envio de mensagens LINE: reply, push, multicast, broadcast e narrowcast."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from messaging_api.connectors.line import messages as line
from messaging_api.connectors.line.base import LineBaseClient

if TYPE_CHECKING:
    from messaging_api.connectors.line.messages import Message

MAX_MESSAGES_PER_REQUEST = 5
MAX_MULTICAST_RECIPIENTS = 500


def _normalize_messages(messages: Message | list[Message]) -> list[Message]:
    result = [messages] if isinstance(messages, dict) else list(messages)
    if not result:
        raise ValueError("Ao menos uma mensagem é obrigatória")
    if len(result) > MAX_MESSAGES_PER_REQUEST:
        raise ValueError(
            f"Máximo de {MAX_MESSAGES_PER_REQUEST} mensagens por request, "
            f"recebido {len(result)}"
        )
    return result


class LineMessagingApi(LineBaseClient):
    """Endpoints de envio de mensagens."""

    # Corpo bruto

    async def reply_raw_body(
        self, body: dict[str, Any], *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "POST", "v2/bot/message/reply", json=body, access_token=access_token
        )

    async def push_raw_body(
        self, body: dict[str, Any], *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "POST", "v2/bot/message/push", json=body, access_token=access_token
        )

    async def multicast_raw_body(
        self, body: dict[str, Any], *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "POST", "v2/bot/message/multicast", json=body, access_token=access_token
        )

    async def broadcast_raw_body(
        self, body: dict[str, Any], *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "POST", "v2/bot/message/broadcast", json=body, access_token=access_token
        )

    # Envio

    async def reply(
        self,
        reply_token: str,
        messages: Message | list[Message],
        *,
        notification_disabled: bool = False,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """Responde a um evento usando o reply token.

        Args:
            reply_token: Token recebido no webhook (uso único)
            messages: Uma mensagem ou lista com até 5 mensagens
            notification_disabled: Envia sem notificação push
            access_token: Override do token para esta chamada

        Raises:
            ValueError: Lista vazia ou com mais de 5 mensagens.
            MessagingApiError: Erro retornado pela LINE.
        """
        body = {
            "reply_token": reply_token,
            "messages": _normalize_messages(messages),
            "notification_disabled": notification_disabled,
        }
        return await self.reply_raw_body(body, access_token=access_token)

    async def push(
        self,
        to: str,
        messages: Message | list[Message],
        *,
        notification_disabled: bool = False,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """Envia mensagens para usuário, grupo ou sala a qualquer momento."""
        body = {
            "to": to,
            "messages": _normalize_messages(messages),
            "notification_disabled": notification_disabled,
        }
        return await self.push_raw_body(body, access_token=access_token)

    async def multicast(
        self,
        to: list[str],
        messages: Message | list[Message],
        *,
        notification_disabled: bool = False,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """Envia as mesmas mensagens para vários usuários.

        Raises:
            ValueError: Mais de 500 destinatários ou mensagens inválidas.
        """
        if len(to) > MAX_MULTICAST_RECIPIENTS:
            raise ValueError(
                f"Máximo de {MAX_MULTICAST_RECIPIENTS} destinatários no multicast, "
                f"recebido {len(to)}"
            )
        body = {
            "to": list(to),
            "messages": _normalize_messages(messages),
            "notification_disabled": notification_disabled,
        }
        return await self.multicast_raw_body(body, access_token=access_token)

    async def broadcast(
        self,
        messages: Message | list[Message],
        *,
        notification_disabled: bool = False,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """Envia mensagens para todos os amigos do bot."""
        body = {
            "messages": _normalize_messages(messages),
            "notification_disabled": notification_disabled,
        }
        return await self.broadcast_raw_body(body, access_token=access_token)

    async def narrowcast(
        self,
        messages: Message | list[Message],
        *,
        recipient: dict[str, Any] | None = None,
        filter: dict[str, Any] | None = None,  # noqa: A002 - nome do campo na API
        limit: dict[str, Any] | None = None,
        notification_disabled: bool = False,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """Envia para um público segmentado (audiência, demografia).

        Returns:
            ``{"request_id": ...}`` para consultar com ``get_narrowcast_progress``.
        """
        body: dict[str, Any] = {
            "messages": _normalize_messages(messages),
            "notification_disabled": notification_disabled,
        }
        if recipient is not None:
            body["recipient"] = recipient
        if filter is not None:
            body["filter"] = filter
        if limit is not None:
            body["limit"] = limit

        response = await self._execute(
            "POST", "v2/bot/message/narrowcast", json=body, access_token=access_token
        )
        return {"request_id": response.headers.get("x-line-request-id")}

    async def get_narrowcast_progress(
        self, request_id: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "GET",
            "v2/bot/message/progress/narrowcast",
            params={"requestId": request_id},
            access_token=access_token,
        )

    # Atalhos de reply

    async def reply_text(
        self, reply_token: str, text: str, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.reply(reply_token, line.create_text(text, options), **kwargs)

    async def reply_image(
        self, reply_token: str, image: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.reply(reply_token, line.create_image(image, options), **kwargs)

    async def reply_video(
        self, reply_token: str, video: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.reply(reply_token, line.create_video(video, options), **kwargs)

    async def reply_audio(
        self, reply_token: str, audio: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.reply(reply_token, line.create_audio(audio, options), **kwargs)

    async def reply_location(
        self, reply_token: str, location: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.reply(reply_token, line.create_location(location, options), **kwargs)

    async def reply_sticker(
        self, reply_token: str, sticker: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.reply(reply_token, line.create_sticker(sticker, options), **kwargs)

    async def reply_imagemap(
        self,
        reply_token: str,
        alt_text: str,
        imagemap: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_imagemap(alt_text, imagemap, options)
        return await self.reply(reply_token, message, **kwargs)

    async def reply_flex(
        self,
        reply_token: str,
        alt_text: str,
        contents: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_flex(alt_text, contents, options)
        return await self.reply(reply_token, message, **kwargs)

    async def reply_template(
        self,
        reply_token: str,
        alt_text: str,
        template: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_template(alt_text, template, options)
        return await self.reply(reply_token, message, **kwargs)

    async def reply_buttons_template(
        self,
        reply_token: str,
        alt_text: str,
        buttons: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_buttons_template(alt_text, buttons, options)
        return await self.reply(reply_token, message, **kwargs)

    async def reply_confirm_template(
        self,
        reply_token: str,
        alt_text: str,
        confirm: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_confirm_template(alt_text, confirm, options)
        return await self.reply(reply_token, message, **kwargs)

    async def reply_carousel_template(
        self,
        reply_token: str,
        alt_text: str,
        columns: list[dict[str, Any]],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_carousel_template(alt_text, columns, options=options)
        return await self.reply(reply_token, message, **kwargs)

    async def reply_image_carousel_template(
        self,
        reply_token: str,
        alt_text: str,
        columns: list[dict[str, Any]],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_image_carousel_template(alt_text, columns, options)
        return await self.reply(reply_token, message, **kwargs)

    # Atalhos de push

    async def push_text(
        self, to: str, text: str, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.push(to, line.create_text(text, options), **kwargs)

    async def push_image(
        self, to: str, image: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.push(to, line.create_image(image, options), **kwargs)

    async def push_video(
        self, to: str, video: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.push(to, line.create_video(video, options), **kwargs)

    async def push_audio(
        self, to: str, audio: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.push(to, line.create_audio(audio, options), **kwargs)

    async def push_location(
        self, to: str, location: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.push(to, line.create_location(location, options), **kwargs)

    async def push_sticker(
        self, to: str, sticker: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.push(to, line.create_sticker(sticker, options), **kwargs)

    async def push_imagemap(
        self,
        to: str,
        alt_text: str,
        imagemap: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        return await self.push(to, line.create_imagemap(alt_text, imagemap, options), **kwargs)

    async def push_flex(
        self,
        to: str,
        alt_text: str,
        contents: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        return await self.push(to, line.create_flex(alt_text, contents, options), **kwargs)

    async def push_template(
        self,
        to: str,
        alt_text: str,
        template: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        return await self.push(to, line.create_template(alt_text, template, options), **kwargs)

    async def push_buttons_template(
        self,
        to: str,
        alt_text: str,
        buttons: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_buttons_template(alt_text, buttons, options)
        return await self.push(to, message, **kwargs)

    async def push_confirm_template(
        self,
        to: str,
        alt_text: str,
        confirm: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_confirm_template(alt_text, confirm, options)
        return await self.push(to, message, **kwargs)

    async def push_carousel_template(
        self,
        to: str,
        alt_text: str,
        columns: list[dict[str, Any]],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_carousel_template(alt_text, columns, options=options)
        return await self.push(to, message, **kwargs)

    async def push_image_carousel_template(
        self,
        to: str,
        alt_text: str,
        columns: list[dict[str, Any]],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_image_carousel_template(alt_text, columns, options)
        return await self.push(to, message, **kwargs)

    # Atalhos de multicast

    async def multicast_text(
        self, to: list[str], text: str, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.multicast(to, line.create_text(text, options), **kwargs)

    async def multicast_image(
        self, to: list[str], image: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.multicast(to, line.create_image(image, options), **kwargs)

    async def multicast_video(
        self, to: list[str], video: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.multicast(to, line.create_video(video, options), **kwargs)

    async def multicast_audio(
        self, to: list[str], audio: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.multicast(to, line.create_audio(audio, options), **kwargs)

    async def multicast_location(
        self, to: list[str], location: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.multicast(to, line.create_location(location, options), **kwargs)

    async def multicast_sticker(
        self, to: list[str], sticker: Any, options: dict[str, Any] | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        return await self.multicast(to, line.create_sticker(sticker, options), **kwargs)

    async def multicast_imagemap(
        self,
        to: list[str],
        alt_text: str,
        imagemap: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_imagemap(alt_text, imagemap, options)
        return await self.multicast(to, message, **kwargs)

    async def multicast_flex(
        self,
        to: list[str],
        alt_text: str,
        contents: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_flex(alt_text, contents, options)
        return await self.multicast(to, message, **kwargs)

    async def multicast_template(
        self,
        to: list[str],
        alt_text: str,
        template: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_template(alt_text, template, options)
        return await self.multicast(to, message, **kwargs)

    async def multicast_buttons_template(
        self,
        to: list[str],
        alt_text: str,
        buttons: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_buttons_template(alt_text, buttons, options)
        return await self.multicast(to, message, **kwargs)

    async def multicast_confirm_template(
        self,
        to: list[str],
        alt_text: str,
        confirm: dict[str, Any],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_confirm_template(alt_text, confirm, options)
        return await self.multicast(to, message, **kwargs)

    async def multicast_carousel_template(
        self,
        to: list[str],
        alt_text: str,
        columns: list[dict[str, Any]],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_carousel_template(alt_text, columns, options=options)
        return await self.multicast(to, message, **kwargs)

    async def multicast_image_carousel_template(
        self,
        to: list[str],
        alt_text: str,
        columns: list[dict[str, Any]],
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        message = line.create_image_carousel_template(alt_text, columns, options)
        return await self.multicast(to, message, **kwargs)
