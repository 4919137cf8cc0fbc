"""Cliente LINE Messaging API.

Uso:
    async with LineClient(access_token, channel_secret) as client:
        await client.reply_text(reply_token, "Olá")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from messaging_api.connectors.line.messaging import LineMessagingApi
from messaging_api.connectors.line.resources import LineResourcesApi
from messaging_api.infra.http import HttpClientConfig

if TYPE_CHECKING:
    from messaging_api.config.settings.line import LineSettings


class LineClient(LineMessagingApi, LineResourcesApi):
    """Cliente completo: envio de mensagens e gestão de recursos do canal."""


def create_line_client(settings: LineSettings | None = None, **kwargs: object) -> LineClient:
    """Factory para criar cliente LINE a partir das settings.

    Args:
        settings: LineSettings opcional. Se None, carrega do ambiente.
        **kwargs: Repassados ao construtor (on_request, transport).

    Returns:
        Cliente configurado.
    """
    # Import local para evitar dependência circular
    from messaging_api.config.settings.line import get_line_settings

    line = settings or get_line_settings()
    config = HttpClientConfig(
        timeout_seconds=line.request_timeout_seconds,
        max_retries=line.max_retries,
    )
    return LineClient(
        line.access_token,
        line.channel_secret,
        origin=line.api_origin,
        data_origin=line.data_origin,
        config=config,
        **kwargs,
    )
