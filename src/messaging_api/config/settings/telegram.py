"""Settings específicas de Telegram Bot API."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

TELEGRAM_API_ORIGIN: str = "https://api.telegram.org"


@dataclass(frozen=True)
class TelegramSettings:
    """Configurações do canal Telegram.

    Attributes:
        bot_token: Token do bot (BotFather)
        webhook_secret: Valor esperado em X-Telegram-Bot-Api-Secret-Token
        api_origin: Origem da Bot API
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de rate limit
    """

    bot_token: str = ""
    webhook_secret: str = ""
    api_origin: str = TELEGRAM_API_ORIGIN
    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    @property
    def is_configured(self) -> bool:
        return bool(self.bot_token)

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Telegram."""
        errors: list[str] = []

        if not self.bot_token:
            errors.append("TELEGRAM_BOT_TOKEN não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("TELEGRAM_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("TELEGRAM_MAX_RETRIES deve ser >= 0")

        return errors


def _load_from_env() -> TelegramSettings:
    """Carrega TelegramSettings a partir de variáveis de ambiente."""
    return TelegramSettings(
        bot_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
        webhook_secret=os.getenv("TELEGRAM_WEBHOOK_SECRET", ""),
        api_origin=os.getenv("TELEGRAM_API_ORIGIN", TELEGRAM_API_ORIGIN),
        request_timeout_seconds=float(
            os.getenv("TELEGRAM_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        max_retries=int(os.getenv("TELEGRAM_MAX_RETRIES", "3")),
    )


@lru_cache(maxsize=1)
def get_telegram_settings() -> TelegramSettings:
    """Retorna instância cacheada de TelegramSettings."""
    return _load_from_env()
