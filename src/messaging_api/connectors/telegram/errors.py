"""Erros da Telegram Bot API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from messaging_api.common.errors import MessagingApiError

if TYPE_CHECKING:
    import httpx


def parse_telegram_error(response: httpx.Response) -> MessagingApiError:
    """Converte response com ``ok: false`` em MessagingApiError.

    Respostas 2xx trazem só a descrição; status de erro inclui ``error_code``.
    """
    try:
        data = response.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    description = data.get("description") or ""
    error_code = data.get("error_code", response.status_code)
    if response.is_error:
        message = f"Telegram API - {error_code} {description}"
    else:
        message = f"Telegram API - {description}"

    retry_after = (data.get("parameters") or {}).get("retry_after")
    return MessagingApiError(
        message,
        response=response,
        provider_code=error_code,
        is_retryable=retry_after is not None or response.status_code >= 500,
    )
