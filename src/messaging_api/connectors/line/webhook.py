"""Parse e validação de webhooks LINE."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from messaging_api.common.case import snakecase_keys_deep
from messaging_api.common.webhook import (
    InvalidSignatureError,
    get_header,
    load_json_object,
)
from messaging_api.infra.crypto.signature import verify_line_signature

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADER = "X-Line-Signature"


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    channel_secret: str,
) -> dict[str, Any]:
    """Valida X-Line-Signature e devolve o payload em snake_case.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos
        channel_secret: Channel secret do canal

    Raises:
        InvalidSignatureError: Se assinatura estiver ausente ou inválida
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto

    Returns:
        Payload com ``destination`` e ``events`` (chaves em snake_case).
    """
    signature = get_header(headers, SIGNATURE_HEADER)
    if not signature:
        raise InvalidSignatureError("missing_signature")
    if not verify_line_signature(raw_body, channel_secret, signature):
        raise InvalidSignatureError("invalid_signature")

    return snakecase_keys_deep(load_json_object(raw_body))
