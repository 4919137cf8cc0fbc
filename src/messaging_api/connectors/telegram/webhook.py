"""Validação de webhooks da Telegram Bot API."""

from __future__ import annotations

import hmac
from typing import TYPE_CHECKING, Any

from messaging_api.common.webhook import (
    InvalidSignatureError,
    get_header,
    load_json_object,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

SECRET_TOKEN_HEADER = "X-Telegram-Bot-Api-Secret-Token"


def verify_secret_token(header_value: str | None, expected: str | None) -> bool:
    """Compara o secret token do header em tempo constante."""
    if not header_value or not expected:
        return False
    return hmac.compare_digest(header_value.encode("utf-8"), expected.encode("utf-8"))


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret_token: str | None,
) -> dict[str, Any]:
    """Valida secret token (quando configurado) e devolve o Update.

    Raises:
        InvalidSignatureError: Token ausente ou divergente
        InvalidJsonError: JSON inválido ou não-objeto
    """
    if secret_token:
        received = get_header(headers, SECRET_TOKEN_HEADER)
        if not received:
            raise InvalidSignatureError("missing_signature")
        if not verify_secret_token(received, secret_token):
            raise InvalidSignatureError("invalid_signature")

    return load_json_object(raw_body)
