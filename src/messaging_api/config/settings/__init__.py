"""Agregador de settings dos provedores.

Re-exporta todas as settings e funções de cada módulo.
Um arquivo por canal para isolamento de mudanças.
"""

from __future__ import annotations

from messaging_api.config.settings.botframework import (
    BotFrameworkSettings,
    get_botframework_settings,
)
from messaging_api.config.settings.line import LineSettings, get_line_settings
from messaging_api.config.settings.messenger import (
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    MessengerSettings,
    get_messenger_settings,
)
from messaging_api.config.settings.telegram import (
    TelegramSettings,
    get_telegram_settings,
)
from messaging_api.config.settings.viber import ViberSettings, get_viber_settings
from messaging_api.config.settings.wechat import WechatSettings, get_wechat_settings

__all__ = [
    # Constants
    "GRAPH_API_BASE_URL",
    "GRAPH_API_VERSION",
    # Channels
    "BotFrameworkSettings",
    "LineSettings",
    "MessengerSettings",
    "TelegramSettings",
    "ViberSettings",
    "WechatSettings",
    "get_botframework_settings",
    "get_line_settings",
    "get_messenger_settings",
    "get_telegram_settings",
    "get_viber_settings",
    "get_wechat_settings",
]
