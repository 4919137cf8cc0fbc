"""Settings específicas de Viber REST bot API."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

VIBER_API_ORIGIN: str = "https://chatapi.viber.com"


@dataclass(frozen=True)
class ViberSettings:
    """Configurações do canal Viber.

    Attributes:
        auth_token: Token do bot (X-Viber-Auth-Token)
        sender_name: Nome exibido como remetente
        sender_avatar: URL do avatar do remetente (opcional)
        api_origin: Origem da API
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de rate limit
    """

    auth_token: str = ""
    sender_name: str = ""
    sender_avatar: str = ""
    api_origin: str = VIBER_API_ORIGIN
    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    @property
    def is_configured(self) -> bool:
        return bool(self.auth_token and self.sender_name)

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Viber."""
        errors: list[str] = []

        if not self.auth_token:
            errors.append("VIBER_AUTH_TOKEN não configurado")

        if not self.sender_name:
            errors.append("VIBER_SENDER_NAME não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("VIBER_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("VIBER_MAX_RETRIES deve ser >= 0")

        return errors


def _load_from_env() -> ViberSettings:
    """Carrega ViberSettings a partir de variáveis de ambiente."""
    return ViberSettings(
        auth_token=os.getenv("VIBER_AUTH_TOKEN", ""),
        sender_name=os.getenv("VIBER_SENDER_NAME", ""),
        sender_avatar=os.getenv("VIBER_SENDER_AVATAR", ""),
        api_origin=os.getenv("VIBER_API_ORIGIN", VIBER_API_ORIGIN),
        request_timeout_seconds=float(os.getenv("VIBER_REQUEST_TIMEOUT_SECONDS", "30")),
        max_retries=int(os.getenv("VIBER_MAX_RETRIES", "3")),
    )


@lru_cache(maxsize=1)
def get_viber_settings() -> ViberSettings:
    """Retorna instância cacheada de ViberSettings."""
    return _load_from_env()
