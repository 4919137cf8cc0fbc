"""Conector Facebook Messenger (Graph API).

Responsabilidades:
- Send API, batch, upload de anexos
- Messenger Profile, labels, handover, insights, personas
- Verificação de webhook (hub.challenge e X-Hub-Signature)
"""

from . import messages
from .client import MessengerClient, create_messenger_client
from .errors import GraphApiError, is_permanent_error, parse_graph_error
from .webhook import parse_webhook_request, verify_webhook_challenge

__all__ = [
    "GraphApiError",
    "MessengerClient",
    "create_messenger_client",
    "is_permanent_error",
    "messages",
    "parse_graph_error",
    "parse_webhook_request",
    "verify_webhook_challenge",
]
