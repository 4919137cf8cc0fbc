"""Formatter JSON dos logs da biblioteca.

Todo record sai com ``correlation_id``, ``service``, timestamp, nível,
logger e mensagem. Logs de chamadas a provedores sempre trazem
``provider``, ``endpoint`` e ``status_code`` (null quando ausentes), o
que permite filtrar por canal sem checar se a chave existe.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

# Campos de API com valor padrão quando o record não os traz via extra
API_LOG_DEFAULTS = {
    "provider": None,
    "endpoint": None,
    "status_code": None,
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-02-02T10:30:00",
            "level": "WARNING",
            "logger": "messaging_api.connectors.line.base",
            "message": "provider_api_error",
            "correlation_id": "abc-123",
            "service": "messaging_api",
            "provider": "line",
            "endpoint": "message/push",
            "status_code": 400
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        defaults=API_LOG_DEFAULTS,
    )
