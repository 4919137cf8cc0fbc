"""Verificação e parse de webhooks da Messenger Platform."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from messaging_api.common.webhook import (
    InvalidSignatureError,
    WebhookChallengeError,
    get_header,
    load_json_object,
)
from messaging_api.infra.crypto.signature import verify_messenger_signature

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADERS = ("X-Hub-Signature-256", "X-Hub-Signature")


def verify_webhook_challenge(
    hub_mode: str | None,
    hub_verify_token: str | None,
    hub_challenge: str | None,
    expected_token: str | None,
) -> str:
    """Valida challenge de webhook e retorna o conteúdo a ser respondido.

    Args:
        hub_mode: Valor de hub.mode
        hub_verify_token: Valor de hub.verify_token
        hub_challenge: Valor de hub.challenge
        expected_token: Token configurado no servidor

    Raises:
        WebhookChallengeError: Se token estiver ausente ou inválido

    Returns:
        Desafio (string) ou vazio
    """
    if not expected_token:
        raise WebhookChallengeError("missing_verify_token")

    if hub_mode != "subscribe" or hub_verify_token != expected_token:
        raise WebhookChallengeError("verification_failed")

    return hub_challenge or ""


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    app_secret: str | None,
) -> dict[str, Any]:
    """Valida assinatura (quando há app_secret) e devolve o payload.

    Prefere X-Hub-Signature-256; aceita X-Hub-Signature (sha1) legado.

    Raises:
        InvalidSignatureError: Assinatura ausente ou inválida
        InvalidJsonError: JSON inválido ou não-objeto
    """
    if app_secret:
        signature = next(
            (value for name in SIGNATURE_HEADERS if (value := get_header(headers, name))),
            None,
        )
        if not signature:
            raise InvalidSignatureError("missing_signature")
        if not verify_messenger_signature(raw_body, app_secret, signature):
            raise InvalidSignatureError("invalid_signature")

    return load_json_object(raw_body)
