"""Cliente Messenger Platform.

Uso:
    async with MessengerClient(page_token, app_secret=app_secret) as client:
        await client.send_text(psid, "Olá")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from messaging_api.connectors.messenger.graph import MessengerGraphApi
from messaging_api.connectors.messenger.profile import MessengerProfileApi
from messaging_api.connectors.messenger.send import MessengerSendApi
from messaging_api.infra.http import HttpClientConfig

if TYPE_CHECKING:
    from messaging_api.config.settings.messenger import MessengerSettings


class MessengerClient(MessengerSendApi, MessengerProfileApi, MessengerGraphApi):
    """Cliente completo da Messenger Platform."""


def create_messenger_client(
    settings: MessengerSettings | None = None, **kwargs: object
) -> MessengerClient:
    """Factory para criar cliente Messenger a partir das settings.

    Args:
        settings: MessengerSettings opcional. Se None, carrega do ambiente.
        **kwargs: Repassados ao construtor (on_request, transport).

    Returns:
        Cliente configurado.
    """
    # Import local para evitar dependência circular
    from messaging_api.config.settings.messenger import get_messenger_settings

    messenger = settings or get_messenger_settings()
    config = HttpClientConfig(
        timeout_seconds=messenger.request_timeout_seconds,
        max_retries=messenger.max_retries,
    )
    return MessengerClient(
        messenger.access_token,
        app_id=messenger.app_id or None,
        app_secret=messenger.app_secret or None,
        version=messenger.api_version,
        origin=messenger.api_base_url,
        skip_app_secret_proof=messenger.skip_app_secret_proof,
        config=config,
        **kwargs,
    )
