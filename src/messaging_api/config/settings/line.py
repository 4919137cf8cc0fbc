"""Settings específicas de LINE.

Configurações do canal LINE Messaging API.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

LINE_API_ORIGIN: str = "https://api.line.me"
LINE_DATA_ORIGIN: str = "https://api-data.line.me"


@dataclass(frozen=True)
class LineSettings:
    """Configurações do canal LINE.

    Attributes:
        access_token: Channel access token (Bearer)
        channel_secret: Channel secret para validar X-Line-Signature
        api_origin: Origem da API principal
        data_origin: Origem da API de conteúdo (imagens, rich menu)
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de rate limit
    """

    access_token: str = ""
    channel_secret: str = ""
    api_origin: str = LINE_API_ORIGIN
    data_origin: str = LINE_DATA_ORIGIN
    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    @property
    def is_configured(self) -> bool:
        return bool(self.access_token)

    def validate(self) -> list[str]:
        """Valida configurações mínimas de LINE.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.access_token:
            errors.append("LINE_ACCESS_TOKEN não configurado")

        if not self.channel_secret:
            errors.append("LINE_CHANNEL_SECRET não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("LINE_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("LINE_MAX_RETRIES deve ser >= 0")

        return errors


def _load_from_env() -> LineSettings:
    """Carrega LineSettings a partir de variáveis de ambiente."""
    return LineSettings(
        access_token=os.getenv("LINE_ACCESS_TOKEN", ""),
        channel_secret=os.getenv("LINE_CHANNEL_SECRET", ""),
        api_origin=os.getenv("LINE_API_ORIGIN", LINE_API_ORIGIN),
        data_origin=os.getenv("LINE_DATA_ORIGIN", LINE_DATA_ORIGIN),
        request_timeout_seconds=float(os.getenv("LINE_REQUEST_TIMEOUT_SECONDS", "30")),
        max_retries=int(os.getenv("LINE_MAX_RETRIES", "3")),
    )


@lru_cache(maxsize=1)
def get_line_settings() -> LineSettings:
    """Retorna instância cacheada de LineSettings."""
    return _load_from_env()
