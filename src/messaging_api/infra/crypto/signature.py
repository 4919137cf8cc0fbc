"""Validação de assinaturas HMAC de webhooks."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac

_MESSENGER_ALGORITHMS = {
    "sha256": hashlib.sha256,
    "sha1": hashlib.sha1,
}


def _to_bytes(value: bytes | str) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def verify_line_signature(
    body: bytes | str,
    channel_secret: str,
    signature: str | None,
) -> bool:
    """Valida header X-Line-Signature.

    Args:
        body: Corpo bruto da requisição
        channel_secret: Channel secret do canal LINE
        signature: Valor do header (HMAC-SHA256 em base64)

    Returns:
        True se assinatura válida. Base64 inválido ou vazio retorna False.
    """
    if not signature or not channel_secret:
        return False

    try:
        received = base64.b64decode(signature, validate=True)
    except (binascii.Error, ValueError):
        return False

    computed = hmac.new(
        channel_secret.encode("utf-8"), _to_bytes(body), hashlib.sha256
    ).digest()
    return hmac.compare_digest(computed, received)


def verify_messenger_signature(
    body: bytes | str,
    app_secret: str,
    signature: str | None,
) -> bool:
    """Valida header X-Hub-Signature-256 (ou X-Hub-Signature legado).

    Args:
        body: Corpo bruto da requisição
        app_secret: App secret do app Meta
        signature: Valor do header no formato ``sha256=<hex>`` ou ``sha1=<hex>``

    Returns:
        True se assinatura válida
    """
    if not signature or not app_secret or "=" not in signature:
        return False

    algorithm, expected = signature.split("=", 1)
    digestmod = _MESSENGER_ALGORITHMS.get(algorithm.lower())
    if digestmod is None:
        return False

    computed = hmac.new(app_secret.encode("utf-8"), _to_bytes(body), digestmod).hexdigest()
    return hmac.compare_digest(computed, expected.lower())


def verify_viber_signature(
    body: bytes | str,
    auth_token: str,
    signature: str | None,
) -> bool:
    """Valida header X-Viber-Content-Signature (HMAC-SHA256 hex)."""
    if not signature or not auth_token:
        return False

    computed = hmac.new(
        auth_token.encode("utf-8"), _to_bytes(body), hashlib.sha256
    ).hexdigest()
    return hmac.compare_digest(computed, signature.lower())


def compute_appsecret_proof(access_token: str, app_secret: str) -> str:
    """Calcula appsecret_proof exigido pela Graph API.

    Returns:
        HMAC-SHA256 hex do access_token usando app_secret como chave.
    """
    return hmac.new(
        app_secret.encode("utf-8"), access_token.encode("utf-8"), hashlib.sha256
    ).hexdigest()
