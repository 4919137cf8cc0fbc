"""Conector Telegram Bot API."""

from .client import TelegramClient, create_telegram_client
from .errors import parse_telegram_error
from .webhook import parse_webhook_request, verify_secret_token

__all__ = [
    "TelegramClient",
    "create_telegram_client",
    "parse_telegram_error",
    "parse_webhook_request",
    "verify_secret_token",
]
