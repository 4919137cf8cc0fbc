"""Erros da Viber REST API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from messaging_api.common.errors import MessagingApiError

if TYPE_CHECKING:
    import httpx

# Códigos de status transitórios segundo a documentação da Viber
TRANSIENT_STATUS_CODES = frozenset({8, 12})


def parse_viber_error(response: httpx.Response, data: Any) -> MessagingApiError:
    """Converte response HTTP de erro ou ``status != 0`` em MessagingApiError."""
    if isinstance(data, dict) and data.get("status"):
        status = data["status"]
        return MessagingApiError(
            f"Viber API - {data.get('status_message', '')}",
            response=response,
            provider_code=status,
            is_retryable=status in TRANSIENT_STATUS_CODES,
        )

    return MessagingApiError(
        f"Viber API - {response.status_code} {response.reason_phrase}",
        response=response,
        is_retryable=response.status_code >= 500,
    )
