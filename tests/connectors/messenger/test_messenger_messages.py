"""Testes para builders e validação de quick replies do Messenger."""

from __future__ import annotations

import pytest

from messaging_api.connectors.messenger import messages as messenger


def _quick_reply(title: str = "Sim", payload: str = "YES") -> dict[str, str]:
    return {"content_type": "text", "title": title, "payload": payload}


def test_create_text_with_quick_replies() -> None:
    message = messenger.create_text("Continuar?", [_quick_reply()])
    assert message == {"text": "Continuar?", "quick_replies": [_quick_reply()]}


def test_create_image_from_url() -> None:
    assert messenger.create_image("https://example.com/a.png") == {
        "attachment": {"type": "image", "payload": {"url": "https://example.com/a.png"}}
    }


def test_create_audio_from_attachment_id() -> None:
    message = messenger.create_audio({"attachment_id": "123"})
    assert message["attachment"]["payload"] == {"attachment_id": "123"}


def test_create_button_template() -> None:
    buttons = [{"type": "postback", "title": "Ok", "payload": "OK"}]
    assert messenger.create_button_template("Escolha", buttons) == {
        "attachment": {
            "type": "template",
            "payload": {"template_type": "button", "text": "Escolha", "buttons": buttons},
        }
    }


def test_thirteen_quick_replies_are_accepted() -> None:
    messenger.validate_quick_replies([_quick_reply() for _ in range(13)])


def test_more_than_thirteen_quick_replies_raise() -> None:
    with pytest.raises(ValueError, match="13"):
        messenger.validate_quick_replies([_quick_reply() for _ in range(14)])


@pytest.mark.parametrize(
    "quick_reply",
    [
        _quick_reply(title=""),
        _quick_reply(title="x" * 21),
        _quick_reply(payload=""),
        _quick_reply(payload="x" * 1001),
    ],
)
def test_invalid_text_quick_reply_raises(quick_reply: dict[str, str]) -> None:
    with pytest.raises(ValueError):
        messenger.validate_quick_replies([quick_reply])


def test_non_text_quick_reply_skips_title_check() -> None:
    messenger.validate_quick_replies([{"content_type": "user_email"}])
