"""Rotas HTTP de entrada (webhooks) para serviços FastAPI.

Estrutura:
- webhooks.py: factories de router por canal
- router.py: agregador configurado pelas settings
"""

from __future__ import annotations

from messaging_api.routes.router import create_webhooks_router
from messaging_api.routes.webhooks import (
    create_line_webhook_router,
    create_messenger_webhook_router,
    create_telegram_webhook_router,
    create_viber_webhook_router,
)

__all__ = [
    "create_line_webhook_router",
    "create_messenger_webhook_router",
    "create_telegram_webhook_router",
    "create_viber_webhook_router",
    "create_webhooks_router",
]
