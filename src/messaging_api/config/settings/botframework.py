"""Settings específicas de Bot Framework Connector."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

BOTFRAMEWORK_TOKEN_URL: str = (
    "https://login.microsoftonline.com/botframework.com/oauth2/v2.0/token"
)
BOTFRAMEWORK_SCOPE: str = "https://api.botframework.com/.default"


@dataclass(frozen=True)
class BotFrameworkSettings:
    """Configurações do canal Bot Framework.

    Attributes:
        app_id: Microsoft App ID do bot
        app_secret: Microsoft App password
        service_url: serviceUrl do canal (vem nas activities recebidas)
        token_url: Endpoint OAuth de client credentials
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de rate limit
    """

    app_id: str = ""
    app_secret: str = ""
    service_url: str = ""
    token_url: str = BOTFRAMEWORK_TOKEN_URL
    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    @property
    def is_configured(self) -> bool:
        return bool(self.app_id and self.app_secret and self.service_url)

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Bot Framework."""
        errors: list[str] = []

        if not self.app_id:
            errors.append("BOTFRAMEWORK_APP_ID não configurado")

        if not self.app_secret:
            errors.append("BOTFRAMEWORK_APP_SECRET não configurado")

        if not self.service_url:
            errors.append("BOTFRAMEWORK_SERVICE_URL não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("BOTFRAMEWORK_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("BOTFRAMEWORK_MAX_RETRIES deve ser >= 0")

        return errors


def _load_from_env() -> BotFrameworkSettings:
    """Carrega BotFrameworkSettings a partir de variáveis de ambiente."""
    return BotFrameworkSettings(
        app_id=os.getenv("BOTFRAMEWORK_APP_ID", ""),
        app_secret=os.getenv("BOTFRAMEWORK_APP_SECRET", ""),
        service_url=os.getenv("BOTFRAMEWORK_SERVICE_URL", ""),
        token_url=os.getenv("BOTFRAMEWORK_TOKEN_URL", BOTFRAMEWORK_TOKEN_URL),
        request_timeout_seconds=float(
            os.getenv("BOTFRAMEWORK_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        max_retries=int(os.getenv("BOTFRAMEWORK_MAX_RETRIES", "3")),
    )


@lru_cache(maxsize=1)
def get_botframework_settings() -> BotFrameworkSettings:
    """Retorna instância cacheada de BotFrameworkSettings."""
    return _load_from_env()
