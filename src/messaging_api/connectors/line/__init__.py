"""Conector LINE Messaging API.

Responsabilidades:
- Cliente HTTP (envio, perfis, grupos, rich menu, LIFF, insights)
- Builders de mensagens
- Validação de webhook (X-Line-Signature)
"""

from . import messages
from .client import LineClient, create_line_client
from .errors import format_line_error, parse_line_error
from .types import AudioContent, ImageContent, Location, Sticker, VideoContent
from .webhook import parse_webhook_request

__all__ = [
    "AudioContent",
    "ImageContent",
    "LineClient",
    "Location",
    "Sticker",
    "VideoContent",
    "create_line_client",
    "format_line_error",
    "messages",
    "parse_line_error",
    "parse_webhook_request",
]
