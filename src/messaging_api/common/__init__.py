"""Utilitários compartilhados entre clientes de provedores."""

from messaging_api.common.case import (
    camelcase,
    camelcase_keys,
    camelcase_keys_deep,
    pascalcase,
    pascalcase_keys,
    pascalcase_keys_deep,
    snakecase,
    snakecase_keys,
    snakecase_keys_deep,
)
from messaging_api.common.errors import MessagingApiError
from messaging_api.common.request import (
    RequestPayload,
    create_request_hook,
    default_on_request,
)

__all__ = [
    "MessagingApiError",
    "RequestPayload",
    "camelcase",
    "camelcase_keys",
    "camelcase_keys_deep",
    "create_request_hook",
    "default_on_request",
    "pascalcase",
    "pascalcase_keys",
    "pascalcase_keys_deep",
    "snakecase",
    "snakecase_keys",
    "snakecase_keys_deep",
]
