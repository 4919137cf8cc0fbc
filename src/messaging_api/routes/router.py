"""Agregador de routers de webhook a partir das settings.

Uso:
    from messaging_api.routes import create_webhooks_router

    app = FastAPI()
    app.include_router(create_webhooks_router({"line": on_line_event}))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter

from messaging_api.config.settings import (
    get_line_settings,
    get_messenger_settings,
    get_telegram_settings,
    get_viber_settings,
)
from messaging_api.routes.webhooks import (
    create_line_webhook_router,
    create_messenger_webhook_router,
    create_telegram_webhook_router,
    create_viber_webhook_router,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from messaging_api.routes.webhooks import WebhookHandler

SUPPORTED_CHANNELS = frozenset({"line", "messenger", "telegram", "viber"})


def create_webhooks_router(
    handlers: Mapping[str, WebhookHandler],
    *,
    prefix: str = "/webhook",
) -> APIRouter:
    """Cria router com um sub-router por canal em ``<prefix>/<canal>``.

    Args:
        handlers: Handler por canal (line, messenger, telegram, viber)
        prefix: Prefixo comum das rotas

    Returns:
        APIRouter com os canais informados.

    Raises:
        ValueError: Canal não suportado.
    """
    unknown = set(handlers) - SUPPORTED_CHANNELS
    if unknown:
        raise ValueError(f"Canais não suportados: {', '.join(sorted(unknown))}")

    api_router = APIRouter()

    if "line" in handlers:
        line = get_line_settings()
        api_router.include_router(
            create_line_webhook_router(line.channel_secret, handlers["line"]),
            prefix=f"{prefix}/line",
            tags=["line"],
        )

    if "messenger" in handlers:
        messenger = get_messenger_settings()
        api_router.include_router(
            create_messenger_webhook_router(
                messenger.verify_token,
                messenger.app_secret or None,
                handlers["messenger"],
            ),
            prefix=f"{prefix}/messenger",
            tags=["messenger"],
        )

    if "telegram" in handlers:
        telegram = get_telegram_settings()
        api_router.include_router(
            create_telegram_webhook_router(
                telegram.webhook_secret or None, handlers["telegram"]
            ),
            prefix=f"{prefix}/telegram",
            tags=["telegram"],
        )

    if "viber" in handlers:
        viber = get_viber_settings()
        api_router.include_router(
            create_viber_webhook_router(viber.auth_token, handlers["viber"]),
            prefix=f"{prefix}/viber",
            tags=["viber"],
        )

    return api_router
