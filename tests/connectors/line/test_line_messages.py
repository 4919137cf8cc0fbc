"""Testes para builders de mensagens LINE."""

from __future__ import annotations

from messaging_api.connectors.line import messages as line
from messaging_api.connectors.line.types import ImageContent, Sticker


def test_create_text_merges_options() -> None:
    quick_reply = {"items": []}
    message = line.create_text("Olá", {"quick_reply": quick_reply})
    assert message == {"type": "text", "text": "Olá", "quick_reply": quick_reply}


def test_create_image_from_url_uses_it_as_preview() -> None:
    message = line.create_image("https://example.com/a.jpg")
    assert message == {
        "type": "image",
        "original_content_url": "https://example.com/a.jpg",
        "preview_image_url": "https://example.com/a.jpg",
    }


def test_create_image_from_model_keeps_preview() -> None:
    image = ImageContent(
        original_content_url="https://example.com/a.jpg",
        preview_image_url="https://example.com/a_small.jpg",
    )
    assert line.create_image(image)["preview_image_url"] == "https://example.com/a_small.jpg"


def test_create_sticker_accepts_model() -> None:
    message = line.create_sticker(Sticker(package_id="1", sticker_id="2"))
    assert message == {"type": "sticker", "package_id": "1", "sticker_id": "2"}


def test_create_video_drops_missing_tracking_id() -> None:
    message = line.create_video(
        {"original_content_url": "https://v.mp4", "preview_image_url": "https://p.jpg"}
    )
    assert "tracking_id" not in message


def test_create_buttons_template_omits_unset_fields() -> None:
    actions = [{"type": "postback", "label": "Sim", "data": "yes"}]
    message = line.create_buttons_template(
        "escolha", {"text": "Quer continuar?", "actions": actions}
    )
    assert message == {
        "type": "template",
        "alt_text": "escolha",
        "template": {"type": "buttons", "text": "Quer continuar?", "actions": actions},
    }


def test_create_carousel_template() -> None:
    columns = [{"text": "a", "actions": []}]
    message = line.create_carousel_template("alt", columns, image_size="contain")
    assert message["template"] == {
        "type": "carousel",
        "columns": columns,
        "image_size": "contain",
    }


def test_create_flex() -> None:
    contents = {"type": "bubble"}
    assert line.create_flex("alt", contents) == {
        "type": "flex",
        "alt_text": "alt",
        "contents": contents,
    }
