"""Builders de mensagens LINE.

Todos retornam dicts em snake_case prontos para ``LineClient.reply``,
``push``, ``multicast`` etc. Opções extras (``quick_reply``, ``sender``)
são mescladas na mensagem.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from messaging_api.common.models import compact, to_payload

if TYPE_CHECKING:
    from messaging_api.connectors.line.types import (
        AudioContent,
        ImageContent,
        Location,
        Sticker,
        VideoContent,
    )

Message = dict[str, Any]


def _with_options(message: Message, options: dict[str, Any] | None) -> Message:
    return {**compact(message), **(options or {})}


def create_text(text: str, options: dict[str, Any] | None = None) -> Message:
    return _with_options({"type": "text", "text": text}, options)


def create_image(
    image: ImageContent | dict[str, Any] | str,
    options: dict[str, Any] | None = None,
) -> Message:
    """Cria mensagem de imagem.

    Args:
        image: URL ou conteúdo com ``original_content_url``. Sem
            ``preview_image_url``, usa a própria imagem como preview.
        options: Campos extras da mensagem.
    """
    content = {"original_content_url": image} if isinstance(image, str) else to_payload(image)
    original = content["original_content_url"]
    return _with_options(
        {
            "type": "image",
            "original_content_url": original,
            "preview_image_url": content.get("preview_image_url") or original,
        },
        options,
    )


def create_video(
    video: VideoContent | dict[str, Any],
    options: dict[str, Any] | None = None,
) -> Message:
    content = to_payload(video)
    return _with_options(
        {
            "type": "video",
            "original_content_url": content["original_content_url"],
            "preview_image_url": content["preview_image_url"],
            "tracking_id": content.get("tracking_id"),
        },
        options,
    )


def create_audio(
    audio: AudioContent | dict[str, Any],
    options: dict[str, Any] | None = None,
) -> Message:
    content = to_payload(audio)
    return _with_options(
        {
            "type": "audio",
            "original_content_url": content["original_content_url"],
            "duration": content["duration"],
        },
        options,
    )


def create_location(
    location: Location | dict[str, Any],
    options: dict[str, Any] | None = None,
) -> Message:
    content = to_payload(location)
    return _with_options(
        {
            "type": "location",
            "title": content["title"],
            "address": content["address"],
            "latitude": content["latitude"],
            "longitude": content["longitude"],
        },
        options,
    )


def create_sticker(
    sticker: Sticker | dict[str, Any],
    options: dict[str, Any] | None = None,
) -> Message:
    content = to_payload(sticker)
    return _with_options(
        {
            "type": "sticker",
            "package_id": content["package_id"],
            "sticker_id": content["sticker_id"],
        },
        options,
    )


def create_imagemap(
    alt_text: str,
    imagemap: dict[str, Any],
    options: dict[str, Any] | None = None,
) -> Message:
    """Cria mensagem imagemap.

    Args:
        alt_text: Texto alternativo exibido em notificações.
        imagemap: ``base_url``, ``base_size``, ``actions`` e ``video`` opcional.
        options: Campos extras da mensagem.
    """
    return _with_options(
        {
            "type": "imagemap",
            "base_url": imagemap["base_url"],
            "alt_text": alt_text,
            "base_size": imagemap["base_size"],
            "video": imagemap.get("video"),
            "actions": imagemap["actions"],
        },
        options,
    )


def create_template(
    alt_text: str,
    template: dict[str, Any],
    options: dict[str, Any] | None = None,
) -> Message:
    return _with_options(
        {"type": "template", "alt_text": alt_text, "template": compact(template)},
        options,
    )


def create_buttons_template(
    alt_text: str,
    buttons: dict[str, Any],
    options: dict[str, Any] | None = None,
) -> Message:
    """Cria template de botões.

    Args:
        alt_text: Texto alternativo.
        buttons: ``text`` e ``actions`` obrigatórios; ``thumbnail_image_url``,
            ``image_aspect_ratio``, ``image_size``, ``image_background_color``,
            ``title`` e ``default_action`` opcionais.
        options: Campos extras da mensagem.
    """
    template = {
        "type": "buttons",
        "thumbnail_image_url": buttons.get("thumbnail_image_url"),
        "image_aspect_ratio": buttons.get("image_aspect_ratio"),
        "image_size": buttons.get("image_size"),
        "image_background_color": buttons.get("image_background_color"),
        "title": buttons.get("title"),
        "text": buttons["text"],
        "default_action": buttons.get("default_action"),
        "actions": buttons["actions"],
    }
    return create_template(alt_text, template, options)


create_button_template = create_buttons_template


def create_confirm_template(
    alt_text: str,
    confirm: dict[str, Any],
    options: dict[str, Any] | None = None,
) -> Message:
    template = {"type": "confirm", "text": confirm["text"], "actions": confirm["actions"]}
    return create_template(alt_text, template, options)


def create_carousel_template(
    alt_text: str,
    columns: list[dict[str, Any]],
    image_aspect_ratio: str | None = None,
    image_size: str | None = None,
    options: dict[str, Any] | None = None,
) -> Message:
    template = {
        "type": "carousel",
        "columns": columns,
        "image_aspect_ratio": image_aspect_ratio,
        "image_size": image_size,
    }
    return create_template(alt_text, template, options)


def create_image_carousel_template(
    alt_text: str,
    columns: list[dict[str, Any]],
    options: dict[str, Any] | None = None,
) -> Message:
    return create_template(
        alt_text, {"type": "image_carousel", "columns": columns}, options
    )


def create_flex(
    alt_text: str,
    contents: dict[str, Any],
    options: dict[str, Any] | None = None,
) -> Message:
    return _with_options(
        {"type": "flex", "alt_text": alt_text, "contents": contents}, options
    )
