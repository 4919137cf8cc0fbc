"""Erros e helpers de parsing para Graph API (Messenger)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from messaging_api.common.errors import MessagingApiError

if TYPE_CHECKING:
    import httpx


@dataclass(frozen=True)
class GraphApiError:
    """Erro retornado pela Graph API."""

    error_type: str
    error_code: int
    error_message: str
    is_permanent: bool  # True se erro não é retentável


def is_permanent_error(
    error_code: int, error_type: str, status_code: int | None = None
) -> bool:
    """Classifica erro como permanente ou transitório.

    Erros transitórios: 1/2 (API temporária), 4/17/32/613 (rate limit).
    OAuthException e códigos de parâmetro inválido são permanentes.
    Códigos desconhecidos são permanentes, exceto com HTTP 429 ou 5xx.
    """
    transient_codes = {1, 2, 4, 17, 32, 613}
    if error_code in transient_codes:
        return False

    permanent_types = {"OAuthException", "GraphMethodException", "InvalidRequest"}
    if error_type in permanent_types or error_code in {10, 100, 190, 200, 551}:
        return True
    return not (status_code is not None and (status_code == 429 or status_code >= 500))


def parse_graph_error(
    response_data: Any, status_code: int | None = None
) -> GraphApiError | None:
    """Extrai informações de erro do response da Graph API.

    Args:
        response_data: Corpo JSON do response
        status_code: Status HTTP, usado para códigos desconhecidos

    Returns:
        GraphApiError se houver erro, None se sucesso
    """
    if not isinstance(response_data, dict):
        return None
    error_obj = response_data.get("error")
    if not error_obj or not isinstance(error_obj, dict):
        return None

    error_type = error_obj.get("type", "unknown")
    error_code = error_obj.get("code", 0)
    error_message = error_obj.get("message", "Erro desconhecido")

    return GraphApiError(
        error_type=error_type,
        error_code=error_code,
        error_message=error_message,
        is_permanent=is_permanent_error(error_code, error_type, status_code),
    )


def to_messaging_error(response: httpx.Response) -> MessagingApiError:
    """Converte response de erro em ``Messenger API - <code> <type> <message>``."""
    try:
        data = response.json()
    except ValueError:
        data = None

    graph_error = parse_graph_error(data, response.status_code)
    if graph_error is None:
        return MessagingApiError(
            f"Messenger API - {response.status_code} {response.reason_phrase}",
            response=response,
            is_retryable=response.status_code == 429 or response.status_code >= 500,
        )

    return MessagingApiError(
        f"Messenger API - {graph_error.error_code} {graph_error.error_type} "
        f"{graph_error.error_message}",
        response=response,
        provider_code=graph_error.error_code,
        is_retryable=not graph_error.is_permanent,
    )
