"""Settings específicas de Facebook Messenger.

Configurações da Messenger Platform via Graph API.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes do Graph API
GRAPH_API_VERSION: str = "6.0"
GRAPH_API_BASE_URL: str = "https://graph.facebook.com"


@dataclass(frozen=True)
class MessengerSettings:
    """Configurações do canal Messenger.

    Attributes:
        access_token: Page access token
        app_id: ID do app Meta
        app_secret: App secret (appsecret_proof e X-Hub-Signature)
        verify_token: Token para verificação de webhook
        api_version: Versão da Graph API (sem o prefixo "v")
        api_base_url: URL base da Graph API
        skip_app_secret_proof: Desabilita envio de appsecret_proof
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de rate limit
    """

    access_token: str = ""
    app_id: str = ""
    app_secret: str = ""
    verify_token: str = ""
    api_version: str = GRAPH_API_VERSION
    api_base_url: str = GRAPH_API_BASE_URL
    skip_app_secret_proof: bool | None = None
    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    @property
    def is_configured(self) -> bool:
        return bool(self.access_token)

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.api_base_url}/v{self.api_version.lstrip('v')}"

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Messenger.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.access_token:
            errors.append("MESSENGER_ACCESS_TOKEN não configurado")

        if self.skip_app_secret_proof is False and not self.app_secret:
            errors.append(
                "MESSENGER_APP_SECRET é obrigatório quando appsecret_proof está ativo"
            )

        if self.request_timeout_seconds <= 0:
            errors.append("MESSENGER_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("MESSENGER_MAX_RETRIES deve ser >= 0")

        return errors


def _parse_optional_bool(raw: str | None) -> bool | None:
    if raw is None or raw == "":
        return None
    return raw.lower() in ("1", "true", "yes")


def _load_from_env() -> MessengerSettings:
    """Carrega MessengerSettings a partir de variáveis de ambiente."""
    return MessengerSettings(
        access_token=os.getenv("MESSENGER_ACCESS_TOKEN", ""),
        app_id=os.getenv("MESSENGER_APP_ID", ""),
        app_secret=os.getenv("MESSENGER_APP_SECRET", ""),
        verify_token=os.getenv("MESSENGER_VERIFY_TOKEN", ""),
        api_version=os.getenv("MESSENGER_API_VERSION", GRAPH_API_VERSION),
        api_base_url=os.getenv("MESSENGER_API_BASE_URL", GRAPH_API_BASE_URL),
        skip_app_secret_proof=_parse_optional_bool(
            os.getenv("MESSENGER_SKIP_APP_SECRET_PROOF")
        ),
        request_timeout_seconds=float(
            os.getenv("MESSENGER_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        max_retries=int(os.getenv("MESSENGER_MAX_RETRIES", "3")),
    )


@lru_cache(maxsize=1)
def get_messenger_settings() -> MessengerSettings:
    """Retorna instância cacheada de MessengerSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
