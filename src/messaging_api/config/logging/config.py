"""Configuração centralizada de logging.

Os clientes só usam ``logging.getLogger(__name__)``; quem embute a
biblioteca decide a saída. ``configure_logging`` instala saída JSON
estruturada para serviços que não têm configuração própria.

Uso:
    from messaging_api.config.logging import configure_logging

    configure_logging(level="INFO", service_name="meu_bot")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from messaging_api.config.logging.filters import CorrelationIdFilter
from messaging_api.config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

# Níveis de log válidos
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "messaging_api"

LIBRARY_LOGGER_NAME = "messaging_api"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado no root logger.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função opcional que retorna o correlation_id
            do contexto atual (ex: de ContextVar).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado.

    Args:
        name: Nome do logger (geralmente __name__).
    """
    return logging.getLogger(name)


def set_library_log_level(level: str) -> None:
    """Ajusta apenas o nível dos loggers ``messaging_api.*``.

    Útil para ligar o log de requests (DEBUG) sem poluir o resto do serviço.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(f"Nível de log inválido: {level}")
    logging.getLogger(LIBRARY_LOGGER_NAME).setLevel(level_upper)
