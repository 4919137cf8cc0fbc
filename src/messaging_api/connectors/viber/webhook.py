"""Validação de callbacks da Viber."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from messaging_api.common.webhook import (
    InvalidSignatureError,
    get_header,
    load_json_object,
)
from messaging_api.infra.crypto.signature import verify_viber_signature

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADER = "X-Viber-Content-Signature"


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    auth_token: str,
) -> dict[str, Any]:
    """Valida X-Viber-Content-Signature e devolve o callback.

    Raises:
        InvalidSignatureError: Assinatura ausente ou inválida
        InvalidJsonError: JSON inválido ou não-objeto
    """
    signature = get_header(headers, SIGNATURE_HEADER)
    if not signature:
        raise InvalidSignatureError("missing_signature")
    if not verify_viber_signature(raw_body, auth_token, signature):
        raise InvalidSignatureError("invalid_signature")

    return load_json_object(raw_body)
