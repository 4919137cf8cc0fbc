"""Erros da WeChat Official Account API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from messaging_api.common.errors import MessagingApiError

if TYPE_CHECKING:
    import httpx

# -1: sistema ocupado; 45009: limite diário de chamadas
TRANSIENT_ERRCODES = frozenset({-1, 45009})


def has_error(data: Any) -> bool:
    return isinstance(data, dict) and bool(data.get("errcode"))


def parse_wechat_error(response: httpx.Response, data: Any) -> MessagingApiError:
    """Monta ``WeChat API - <errcode> <errmsg>`` a partir do corpo."""
    if has_error(data):
        errcode = data["errcode"]
        return MessagingApiError(
            f"WeChat API - {errcode} {data.get('errmsg', '')}",
            response=response,
            provider_code=errcode,
            is_retryable=errcode in TRANSIENT_ERRCODES,
        )

    return MessagingApiError(
        f"WeChat API - {response.status_code} {response.reason_phrase}",
        response=response,
        is_retryable=response.status_code >= 500,
    )
