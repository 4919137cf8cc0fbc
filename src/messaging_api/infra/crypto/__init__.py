"""Validação de assinaturas de webhooks."""

from .signature import (
    compute_appsecret_proof,
    verify_line_signature,
    verify_messenger_signature,
    verify_viber_signature,
)

__all__ = [
    "compute_appsecret_proof",
    "verify_line_signature",
    "verify_messenger_signature",
    "verify_viber_signature",
]
