"""Erros e parsing comum de webhooks recebidos (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura inválida do webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


class WebhookChallengeError(WebhookRequestError):
    """Erro de verificação do desafio do webhook."""


def get_header(headers: Mapping[str, str], name: str) -> str | None:
    """Busca header sem diferenciar maiúsculas."""
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def load_json_object(raw_body: bytes) -> dict[str, object]:
    """Parseia corpo JSON exigindo objeto no topo.

    Raises:
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto
    """
    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    return payload
