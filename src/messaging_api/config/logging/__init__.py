"""Configuração de logging estruturado.

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime
"""

from messaging_api.config.logging.config import (
    configure_logging,
    get_logger,
    set_library_log_level,
)
from messaging_api.config.logging.filters import CorrelationIdFilter
from messaging_api.config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "set_library_log_level",
]
