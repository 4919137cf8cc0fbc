"""Clientes HTTP tipados para plataformas de mensagens.

Provedores: LINE, Facebook Messenger, Telegram, Viber, WeChat e Bot Framework.

Uso:
    from messaging_api import create_line_client

    async with create_line_client() as client:
        await client.push_text(user_id, "Olá")
"""

from messaging_api.common import (
    MessagingApiError,
    RequestPayload,
    camelcase_keys,
    camelcase_keys_deep,
    pascalcase_keys,
    pascalcase_keys_deep,
    snakecase_keys,
    snakecase_keys_deep,
)
from messaging_api.connectors.botframework import (
    BotFrameworkClient,
    create_botframework_client,
)
from messaging_api.connectors.line import LineClient, create_line_client
from messaging_api.connectors.messenger import MessengerClient, create_messenger_client
from messaging_api.connectors.telegram import TelegramClient, create_telegram_client
from messaging_api.connectors.viber import ViberClient, create_viber_client
from messaging_api.connectors.wechat import WechatClient, create_wechat_client

__version__ = "1.0.0"

__all__ = [
    "BotFrameworkClient",
    "LineClient",
    "MessagingApiError",
    "MessengerClient",
    "RequestPayload",
    "TelegramClient",
    "ViberClient",
    "WechatClient",
    "__version__",
    "camelcase_keys",
    "camelcase_keys_deep",
    "create_botframework_client",
    "create_line_client",
    "create_messenger_client",
    "create_telegram_client",
    "create_viber_client",
    "create_wechat_client",
    "pascalcase_keys",
    "pascalcase_keys_deep",
    "snakecase_keys",
    "snakecase_keys_deep",
]
