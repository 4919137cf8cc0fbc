"""Settings específicas de WeChat Official Account."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

WECHAT_API_ORIGIN: str = "https://api.weixin.qq.com"


@dataclass(frozen=True)
class WechatSettings:
    """Configurações do canal WeChat.

    Attributes:
        app_id: AppID da conta oficial
        app_secret: AppSecret da conta oficial
        api_origin: Origem da API
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de rate limit
    """

    app_id: str = ""
    app_secret: str = ""
    api_origin: str = WECHAT_API_ORIGIN
    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    @property
    def is_configured(self) -> bool:
        return bool(self.app_id and self.app_secret)

    def validate(self) -> list[str]:
        """Valida configurações mínimas de WeChat."""
        errors: list[str] = []

        if not self.app_id:
            errors.append("WECHAT_APP_ID não configurado")

        if not self.app_secret:
            errors.append("WECHAT_APP_SECRET não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("WECHAT_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("WECHAT_MAX_RETRIES deve ser >= 0")

        return errors


def _load_from_env() -> WechatSettings:
    """Carrega WechatSettings a partir de variáveis de ambiente."""
    return WechatSettings(
        app_id=os.getenv("WECHAT_APP_ID", ""),
        app_secret=os.getenv("WECHAT_APP_SECRET", ""),
        api_origin=os.getenv("WECHAT_API_ORIGIN", WECHAT_API_ORIGIN),
        request_timeout_seconds=float(os.getenv("WECHAT_REQUEST_TIMEOUT_SECONDS", "30")),
        max_retries=int(os.getenv("WECHAT_MAX_RETRIES", "3")),
    )


@lru_cache(maxsize=1)
def get_wechat_settings() -> WechatSettings:
    """Retorna instância cacheada de WechatSettings."""
    return _load_from_env()
