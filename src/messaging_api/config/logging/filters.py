"""Filter de logging para injeção de contexto.

Campos injetados:
- correlation_id: ID do webhook em processamento (ContextVar das rotas)
- service: Nome do serviço que embute os clientes
- provider: Canal derivado do logger ``messaging_api.connectors.<canal>``
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from messaging_api.common.correlation import get_correlation_id

if TYPE_CHECKING:
    from collections.abc import Callable

_CONNECTORS_PREFIX = "messaging_api.connectors."


def provider_from_logger_name(name: str) -> str | None:
    """``messaging_api.connectors.line.client`` -> ``line``."""
    if not name.startswith(_CONNECTORS_PREFIX):
        return None
    return name[len(_CONNECTORS_PREFIX) :].split(".", 1)[0] or None


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id, service e provider em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, lê o contexto das rotas de webhook.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or get_correlation_id

    def filter(self, record: logging.LogRecord) -> bool:
        # Valores passados via extra têm prioridade
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        if not getattr(record, "provider", None):
            record.provider = provider_from_logger_name(record.name)
        return True
