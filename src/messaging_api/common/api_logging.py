"""Helpers de logging para chamadas aos provedores (sem PII)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from messaging_api.common.errors import MessagingApiError

logger = logging.getLogger(__name__)


def log_api_error(
    provider: str,
    error: MessagingApiError,
    method: str,
    endpoint: str,
) -> None:
    """Loga erro do provedor sem expor tokens ou conteúdo de mensagens."""
    logger.warning(
        "provider_api_error",
        extra={
            "provider": provider,
            "method": method,
            "endpoint": endpoint,
            "status_code": error.status_code,
            "provider_code": error.provider_code,
            "is_retryable": error.is_retryable,
        },
    )


def log_success(
    provider: str,
    method: str,
    endpoint: str,
    status_code: int,
) -> None:
    """Loga sucesso sem expor dados sensíveis."""
    logger.debug(
        "provider_api_success",
        extra={
            "provider": provider,
            "method": method,
            "endpoint": endpoint,
            "status_code": status_code,
        },
    )
