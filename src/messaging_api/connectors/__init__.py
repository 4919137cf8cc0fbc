"""Conectores por provedor de mensagens.

Cada subpacote expõe o cliente, a factory ``create_<provedor>_client``
e, quando o provedor assina webhooks, ``parse_webhook_request``.
"""
