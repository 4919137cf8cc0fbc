"""Send API, batch e upload de anexos da Messenger Platform."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import parse_qs, urlencode, urlsplit

from messaging_api.common.case import snakecase_keys_deep
from messaging_api.connectors.messenger import messages as messenger
from messaging_api.connectors.messenger.base import MessengerBaseClient
from messaging_api.infra.crypto.signature import compute_appsecret_proof

MAX_BATCH_SIZE = 50

DEFAULT_FILE_MIME = "application/octet-stream"


def _to_recipient(recipient: str | dict[str, Any]) -> dict[str, Any]:
    return {"id": recipient} if isinstance(recipient, str) else recipient


def _messaging_type(options: dict[str, Any]) -> str:
    if options.get("messaging_type"):
        return options["messaging_type"]
    if options.get("tag"):
        return "MESSAGE_TAG"
    return "UPDATE"


def _encode_batch_body(body: dict[str, Any]) -> str:
    """Serializa corpo de item de batch como form-urlencoded."""
    snake_body = snakecase_keys_deep(body)
    return urlencode(
        {
            key: json.dumps(value) if isinstance(value, (dict, list)) else value
            for key, value in snake_body.items()
        }
    )


def _access_path(data: Any, path: str) -> Any:
    """Resolve caminho pontilhado (``a.b.0``) em dicts e listas."""
    current = data
    for part in path.split("."):
        if isinstance(current, list) and part.isdigit():
            index = int(part)
            current = current[index] if index < len(current) else None
        elif isinstance(current, dict):
            current = current.get(part)
        else:
            return None
    return current


class MessengerSendApi(MessengerBaseClient):
    """Envio de mensagens, sender actions, batch e anexos."""

    async def send_raw_body(self, body: dict[str, Any]) -> dict[str, Any]:
        return await self._call("POST", "me/messages", json=body)

    async def send_message(
        self,
        recipient: str | dict[str, Any],
        message: dict[str, Any],
        **options: Any,
    ) -> dict[str, Any]:
        """Envia mensagem pela Send API.

        Args:
            recipient: PSID ou objeto recipient (ex: ``{"user_ref": ...}``)
            message: Objeto message (ver ``messages``)
            **options: ``messaging_type``, ``tag``, ``notification_type``,
                ``persona_id``, ``quick_replies``

        Returns:
            ``{"recipient_id": ..., "message_id": ...}``
        """
        quick_replies = options.pop("quick_replies", None)
        body = {
            "messaging_type": _messaging_type(options),
            "recipient": _to_recipient(recipient),
            "message": messenger.create_message(message, quick_replies),
            **{key: value for key, value in options.items() if key != "messaging_type"},
        }
        return await self.send_raw_body(body)

    async def send_message_form_data(
        self,
        recipient: str | dict[str, Any],
        attachment_type: str,
        filedata: bytes,
        *,
        filename: str = "file",
        content_type: str = DEFAULT_FILE_MIME,
        **options: Any,
    ) -> dict[str, Any]:
        """Envia anexo como multipart (``message`` JSON + ``filedata``)."""
        quick_replies = options.pop("quick_replies", None)
        message = messenger.create_attachment(
            {"type": attachment_type, "payload": {}}, quick_replies
        )
        data = {
            "messaging_type": _messaging_type(options),
            "recipient": json.dumps(snakecase_keys_deep(_to_recipient(recipient))),
            "message": json.dumps(message),
        }
        data.update(
            {key: str(value) for key, value in options.items() if key != "messaging_type"}
        )
        return await self._call(
            "POST",
            "me/messages",
            data=data,
            files={"filedata": (filename, filedata, content_type)},
        )

    async def send_text(
        self, recipient: str | dict[str, Any], text: str, **options: Any
    ) -> dict[str, Any]:
        return await self.send_message(recipient, messenger.create_text(text), **options)

    async def send_attachment(
        self, recipient: str | dict[str, Any], attachment: dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self.send_message(
            recipient, messenger.create_attachment(attachment), **options
        )

    async def _send_media(
        self,
        media_type: str,
        recipient: str | dict[str, Any],
        media: str | dict[str, Any] | bytes,
        options: dict[str, Any],
    ) -> dict[str, Any]:
        if isinstance(media, (bytes, bytearray)):
            return await self.send_message_form_data(
                recipient, media_type, bytes(media), **options
            )
        message = messenger.create_attachment(
            {"type": media_type, "payload": {"url": media} if isinstance(media, str) else media}
        )
        return await self.send_message(recipient, message, **options)

    async def send_audio(
        self, recipient: str | dict[str, Any], audio: str | dict[str, Any] | bytes, **options: Any
    ) -> dict[str, Any]:
        """Envia áudio por URL, payload (``attachment_id``) ou bytes (multipart)."""
        return await self._send_media("audio", recipient, audio, options)

    async def send_image(
        self, recipient: str | dict[str, Any], image: str | dict[str, Any] | bytes, **options: Any
    ) -> dict[str, Any]:
        return await self._send_media("image", recipient, image, options)

    async def send_video(
        self, recipient: str | dict[str, Any], video: str | dict[str, Any] | bytes, **options: Any
    ) -> dict[str, Any]:
        return await self._send_media("video", recipient, video, options)

    async def send_file(
        self, recipient: str | dict[str, Any], file: str | dict[str, Any] | bytes, **options: Any
    ) -> dict[str, Any]:
        return await self._send_media("file", recipient, file, options)

    # Templates

    async def send_template(
        self, recipient: str | dict[str, Any], payload: dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        return await self.send_message(recipient, messenger.create_template(payload), **options)

    async def send_button_template(
        self,
        recipient: str | dict[str, Any],
        text: str,
        buttons: list[dict[str, Any]],
        **options: Any,
    ) -> dict[str, Any]:
        message = messenger.create_button_template(text, buttons)
        return await self.send_message(recipient, message, **options)

    async def send_generic_template(
        self,
        recipient: str | dict[str, Any],
        elements: list[dict[str, Any]],
        image_aspect_ratio: str = "horizontal",
        **options: Any,
    ) -> dict[str, Any]:
        message = messenger.create_generic_template(elements, image_aspect_ratio)
        return await self.send_message(recipient, message, **options)

    async def send_receipt_template(
        self, recipient: str | dict[str, Any], attrs: dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        message = messenger.create_receipt_template(attrs)
        return await self.send_message(recipient, message, **options)

    async def send_media_template(
        self,
        recipient: str | dict[str, Any],
        elements: list[dict[str, Any]],
        **options: Any,
    ) -> dict[str, Any]:
        message = messenger.create_media_template(elements)
        return await self.send_message(recipient, message, **options)

    async def send_airline_boarding_pass_template(
        self, recipient: str | dict[str, Any], attrs: dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        message = messenger.create_airline_boarding_pass_template(attrs)
        return await self.send_message(recipient, message, **options)

    async def send_airline_checkin_template(
        self, recipient: str | dict[str, Any], attrs: dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        message = messenger.create_airline_checkin_template(attrs)
        return await self.send_message(recipient, message, **options)

    async def send_airline_itinerary_template(
        self, recipient: str | dict[str, Any], attrs: dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        message = messenger.create_airline_itinerary_template(attrs)
        return await self.send_message(recipient, message, **options)

    async def send_airline_update_template(
        self, recipient: str | dict[str, Any], attrs: dict[str, Any], **options: Any
    ) -> dict[str, Any]:
        message = messenger.create_airline_update_template(attrs)
        return await self.send_message(recipient, message, **options)

    async def send_one_time_notif_req_template(
        self,
        recipient: str | dict[str, Any],
        title: str,
        payload: str,
        **options: Any,
    ) -> dict[str, Any]:
        message = messenger.create_one_time_notif_req_template(title, payload)
        return await self.send_message(recipient, message, **options)

    # Sender actions

    async def send_sender_action(
        self, recipient: str | dict[str, Any], sender_action: str
    ) -> dict[str, Any]:
        return await self.send_raw_body(
            {"recipient": _to_recipient(recipient), "sender_action": sender_action}
        )

    async def mark_seen(self, recipient: str | dict[str, Any]) -> dict[str, Any]:
        return await self.send_sender_action(recipient, "mark_seen")

    async def typing_on(self, recipient: str | dict[str, Any]) -> dict[str, Any]:
        return await self.send_sender_action(recipient, "typing_on")

    async def typing_off(self, recipient: str | dict[str, Any]) -> dict[str, Any]:
        return await self.send_sender_action(recipient, "typing_off")

    # Batch

    def _sign_batch_item(self, item: dict[str, Any]) -> dict[str, Any]:
        """Adiciona appsecret_proof ao relative_url quando o item traz token próprio."""
        if self._skip_app_secret_proof or not self._app_secret:
            return item

        relative_url = item.get("relative_url", "")
        token = parse_qs(urlsplit(relative_url).query).get("access_token", [None])[0]
        if token is None and isinstance(item.get("body"), str):
            token = parse_qs(item["body"]).get("access_token", [None])[0]
        if token is None:
            return item

        separator = "&" if "?" in relative_url else "?"
        proof = compute_appsecret_proof(token, self._app_secret)
        return {**item, "relative_url": f"{relative_url}{separator}appsecret_proof={proof}"}

    async def send_batch(
        self,
        batch: list[dict[str, Any]],
        include_headers: bool = True,
    ) -> list[dict[str, Any]]:
        """Executa até 50 requests Graph em uma chamada.

        Cada item tem ``method``, ``relative_url``, ``body`` opcional (dict,
        enviado como form-urlencoded) e ``response_access_path`` opcional
        (caminho pontilhado aplicado ao corpo de resposta).

        Returns:
            Lista de ``{"code", "headers", "body"}`` com body já decodificado.

        Raises:
            ValueError: Mais de 50 itens.
        """
        if len(batch) > MAX_BATCH_SIZE:
            raise ValueError(f"Batch é limitado a {MAX_BATCH_SIZE} requests")

        access_paths = [item.get("response_access_path") for item in batch]
        encoded: list[dict[str, Any]] = []
        for item in batch:
            entry = {key: value for key, value in item.items() if key != "response_access_path"}
            if isinstance(entry.get("body"), dict):
                entry["body"] = _encode_batch_body(entry["body"])
            encoded.append(self._sign_batch_item(entry))

        responses = await self._call(
            "POST",
            "",
            json={
                "include_headers": include_headers,
                "batch": encoded,
            },
        )

        results: list[dict[str, Any]] = []
        for index, item in enumerate(responses):
            if item is None or not item.get("body"):
                results.append(item)
                continue
            body = json.loads(item["body"])
            path = access_paths[index]
            results.append({**item, "body": _access_path(body, path) if path else body})
        return results

    # Anexos reutilizáveis

    async def upload_attachment(
        self,
        attachment_type: str,
        attachment: str | bytes,
        *,
        is_reusable: bool = False,
        filename: str = "file",
        content_type: str = DEFAULT_FILE_MIME,
    ) -> dict[str, Any]:
        """Sobe anexo para reutilização. Retorna ``{"attachment_id": ...}``.

        Args:
            attachment_type: audio, image, video ou file
            attachment: URL pública ou bytes do arquivo
            is_reusable: Permite reenviar pelo attachment_id
            filename: Nome do arquivo (apenas bytes)
            content_type: MIME do arquivo (apenas bytes)
        """
        if isinstance(attachment, str):
            return await self._call(
                "POST",
                "me/message_attachments",
                json={
                    "message": {
                        "attachment": {
                            "type": attachment_type,
                            "payload": {"url": attachment, "is_reusable": is_reusable},
                        }
                    }
                },
            )

        message = {
            "attachment": {"type": attachment_type, "payload": {"is_reusable": is_reusable}}
        }
        return await self._call(
            "POST",
            "me/message_attachments",
            data={"message": json.dumps(message)},
            files={"filedata": (filename, attachment, content_type)},
        )

    async def upload_audio(self, attachment: str | bytes, **options: Any) -> dict[str, Any]:
        return await self.upload_attachment("audio", attachment, **options)

    async def upload_image(self, attachment: str | bytes, **options: Any) -> dict[str, Any]:
        return await self.upload_attachment("image", attachment, **options)

    async def upload_video(self, attachment: str | bytes, **options: Any) -> dict[str, Any]:
        return await self.upload_attachment("video", attachment, **options)

    async def upload_file(self, attachment: str | bytes, **options: Any) -> dict[str, Any]:
        return await self.upload_attachment("file", attachment, **options)
