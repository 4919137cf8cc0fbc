"""Builders de mensagens da Messenger Platform.

Retornam o objeto ``message`` da Send API em snake_case. Quick replies
são validadas contra os limites da plataforma.
"""

from __future__ import annotations

from typing import Any

Message = dict[str, Any]

MAX_QUICK_REPLIES = 13
MAX_QUICK_REPLY_TITLE = 20
MAX_QUICK_REPLY_PAYLOAD = 1000


def validate_quick_replies(quick_replies: list[dict[str, Any]]) -> None:
    """Valida limites de quick replies.

    Raises:
        ValueError: Mais de 13 itens, título de texto acima de 20 caracteres
            ou payload acima de 1000 caracteres.
    """
    if len(quick_replies) > MAX_QUICK_REPLIES:
        raise ValueError(f"quick_replies é limitado a {MAX_QUICK_REPLIES} itens")

    for quick_reply in quick_replies:
        if quick_reply.get("content_type", "text") != "text":
            continue
        title = (quick_reply.get("title") or "").strip()
        if not title or len(title) > MAX_QUICK_REPLY_TITLE:
            raise ValueError(
                f"title de quick reply deve ter entre 1 e {MAX_QUICK_REPLY_TITLE} caracteres"
            )
        payload = quick_reply.get("payload") or ""
        if not payload or len(payload) > MAX_QUICK_REPLY_PAYLOAD:
            raise ValueError(
                f"payload de quick reply deve ter entre 1 e {MAX_QUICK_REPLY_PAYLOAD} caracteres"
            )


def create_message(
    message: Message,
    quick_replies: list[dict[str, Any]] | None = None,
) -> Message:
    result = dict(message)
    if quick_replies:
        validate_quick_replies(quick_replies)
        result["quick_replies"] = quick_replies
    return result


def create_text(text: str, quick_replies: list[dict[str, Any]] | None = None) -> Message:
    return create_message({"text": text}, quick_replies)


def create_attachment(
    attachment: dict[str, Any],
    quick_replies: list[dict[str, Any]] | None = None,
) -> Message:
    return create_message({"attachment": attachment}, quick_replies)


def _create_media(
    media_type: str,
    media: str | dict[str, Any],
    quick_replies: list[dict[str, Any]] | None,
) -> Message:
    payload = {"url": media} if isinstance(media, str) else media
    return create_attachment({"type": media_type, "payload": payload}, quick_replies)


def create_audio(
    audio: str | dict[str, Any], quick_replies: list[dict[str, Any]] | None = None
) -> Message:
    """Cria mensagem de áudio a partir de URL ou payload (ex: ``attachment_id``)."""
    return _create_media("audio", audio, quick_replies)


def create_image(
    image: str | dict[str, Any], quick_replies: list[dict[str, Any]] | None = None
) -> Message:
    return _create_media("image", image, quick_replies)


def create_video(
    video: str | dict[str, Any], quick_replies: list[dict[str, Any]] | None = None
) -> Message:
    return _create_media("video", video, quick_replies)


def create_file(
    file: str | dict[str, Any], quick_replies: list[dict[str, Any]] | None = None
) -> Message:
    return _create_media("file", file, quick_replies)


def create_template(
    payload: dict[str, Any], quick_replies: list[dict[str, Any]] | None = None
) -> Message:
    return create_attachment({"type": "template", "payload": payload}, quick_replies)


def create_button_template(
    text: str,
    buttons: list[dict[str, Any]],
    quick_replies: list[dict[str, Any]] | None = None,
) -> Message:
    return create_template(
        {"template_type": "button", "text": text, "buttons": buttons}, quick_replies
    )


def create_generic_template(
    elements: list[dict[str, Any]],
    image_aspect_ratio: str = "horizontal",
    quick_replies: list[dict[str, Any]] | None = None,
) -> Message:
    return create_template(
        {
            "template_type": "generic",
            "elements": elements,
            "image_aspect_ratio": image_aspect_ratio,
        },
        quick_replies,
    )


def create_media_template(
    elements: list[dict[str, Any]], quick_replies: list[dict[str, Any]] | None = None
) -> Message:
    return create_template({"template_type": "media", "elements": elements}, quick_replies)


def create_receipt_template(
    attrs: dict[str, Any], quick_replies: list[dict[str, Any]] | None = None
) -> Message:
    """Cria template de recibo (recipient_name, order_number, currency, summary...)."""
    return create_template({"template_type": "receipt", **attrs}, quick_replies)


def create_airline_boarding_pass_template(
    attrs: dict[str, Any], quick_replies: list[dict[str, Any]] | None = None
) -> Message:
    return create_template(
        {"template_type": "airline_boardingpass", **attrs}, quick_replies
    )


def create_airline_checkin_template(
    attrs: dict[str, Any], quick_replies: list[dict[str, Any]] | None = None
) -> Message:
    return create_template({"template_type": "airline_checkin", **attrs}, quick_replies)


def create_airline_itinerary_template(
    attrs: dict[str, Any], quick_replies: list[dict[str, Any]] | None = None
) -> Message:
    return create_template(
        {"template_type": "airline_itinerary", **attrs}, quick_replies
    )


def create_airline_update_template(
    attrs: dict[str, Any], quick_replies: list[dict[str, Any]] | None = None
) -> Message:
    return create_template({"template_type": "airline_update", **attrs}, quick_replies)


def create_one_time_notif_req_template(
    title: str,
    payload: str,
    quick_replies: list[dict[str, Any]] | None = None,
) -> Message:
    """Cria pedido de notificação única (One-Time Notification)."""
    return create_template(
        {"template_type": "one_time_notif_req", "title": title, "payload": payload},
        quick_replies,
    )
