"""Conector Bot Framework Connector (REST v3)."""

from .client import BotFrameworkClient, create_botframework_client, parse_botframework_error
from .types import (
    Activity,
    Attachment,
    AttachmentUpload,
    ChannelAccount,
    ConversationAccount,
    ConversationParameters,
)

__all__ = [
    "Activity",
    "Attachment",
    "AttachmentUpload",
    "BotFrameworkClient",
    "ChannelAccount",
    "ConversationAccount",
    "ConversationParameters",
    "create_botframework_client",
    "parse_botframework_error",
]
