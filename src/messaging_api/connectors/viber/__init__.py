"""Conector Viber REST Bot API."""

from .client import ViberClient, create_viber_client, transform_message_case
from .errors import parse_viber_error
from .types import Contact, File, Location, Picture, Sender, Video
from .webhook import parse_webhook_request

__all__ = [
    "Contact",
    "File",
    "Location",
    "Picture",
    "Sender",
    "Video",
    "ViberClient",
    "create_viber_client",
    "parse_viber_error",
    "parse_webhook_request",
    "transform_message_case",
]
