"""Erros e helpers de parsing para LINE Messaging API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from messaging_api.common.errors import MessagingApiError

if TYPE_CHECKING:
    import httpx


def format_line_error(data: dict[str, Any]) -> str:
    """Monta mensagem ``LINE API - <message>`` com uma linha por detalhe."""
    message = f"LINE API - {data.get('message', '')}"
    for detail in data.get("details") or []:
        message += f"\n- {detail.get('property')}: {detail.get('message')}"
    return message


def parse_line_error(response: httpx.Response) -> MessagingApiError:
    """Converte response de erro da LINE em MessagingApiError.

    Args:
        response: Response com status >= 400

    Returns:
        Erro com mensagem formatada; usa o reason HTTP se não houver corpo JSON.
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict) and "message" in data:
        message = format_line_error(data)
    else:
        message = f"LINE API - {response.status_code} {response.reason_phrase}"

    return MessagingApiError(
        message,
        response=response,
        is_retryable=response.status_code == 429 or response.status_code >= 500,
    )
