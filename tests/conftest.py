"""Configuração do pytest para o projeto messaging-api."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from messaging_api.config.settings import (  # noqa: E402
    get_botframework_settings,
    get_line_settings,
    get_messenger_settings,
    get_telegram_settings,
    get_viber_settings,
    get_wechat_settings,
)

_SETTINGS_GETTERS = (
    get_botframework_settings,
    get_line_settings,
    get_messenger_settings,
    get_telegram_settings,
    get_viber_settings,
    get_wechat_settings,
)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Garante que cada teste leia o ambiente do zero."""
    for getter in _SETTINGS_GETTERS:
        getter.cache_clear()
    yield
    for getter in _SETTINGS_GETTERS:
        getter.cache_clear()
