"""Hook de observação de requests de saída.

Cada cliente aceita ``on_request``: um callable chamado com o
``RequestPayload`` de toda requisição antes do envio. O padrão loga
método, URL e corpo em DEBUG, nunca o header Authorization.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = frozenset({"authorization", "x-viber-auth-token"})

_BOT_TOKEN_PATH = re.compile(r"/bot\d+:[^/]+")
_SECRET_QUERY = re.compile(r"((?:access_token|appsecret_proof|secret|input_token)=)[^&]+")
_SECRET_KEYS = frozenset({"access_token", "appsecret_proof", "client_secret", "input_token"})


@dataclass(frozen=True, slots=True)
class RequestPayload:
    """Snapshot de uma request de saída."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None


def _decode_body(content: bytes, content_type: str) -> Any:
    if not content:
        return None
    if "json" in content_type:
        try:
            return _redact_json(json.loads(content))
        except ValueError:
            return content.decode("utf-8", errors="replace")
    if content_type.startswith("application/x-www-form-urlencoded"):
        return _SECRET_QUERY.sub(r"\1***", content.decode("utf-8", errors="replace"))
    return content


def _redact_json(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: "***" if key in _SECRET_KEYS else _redact_json(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_redact_json(item) for item in value]
    if isinstance(value, str):
        return _SECRET_QUERY.sub(r"\1***", value)
    return value


def default_on_request(payload: RequestPayload) -> None:
    """Loga a request em DEBUG (equivalente ao interceptor padrão)."""
    if not logger.isEnabledFor(logging.DEBUG):
        return

    logger.debug(
        "%s - %s",
        payload.method.upper(),
        payload.url,
        extra={"method": payload.method.upper(), "url": payload.url},
    )
    if payload.body is None:
        return
    if isinstance(payload.body, bytes):
        logger.debug("outgoing_request_body", extra={"body_bytes": len(payload.body)})
        return
    if isinstance(payload.body, (dict, list)):
        rendered = json.dumps(payload.body, indent=2, ensure_ascii=False)
    else:
        rendered = str(payload.body)
    logger.debug("outgoing_request_body:\n%s", rendered)


def create_request_hook(
    on_request: Callable[[RequestPayload], Awaitable[None] | None] | None = None,
) -> Callable[[httpx.Request], Awaitable[None]]:
    """Cria event hook httpx que entrega ``RequestPayload`` ao callback.

    Args:
        on_request: Callback síncrono ou assíncrono. Usa
            ``default_on_request`` se None.

    Returns:
        Coroutine function para ``event_hooks={"request": [...]}``.
    """
    callback = on_request or default_on_request

    async def hook(request: httpx.Request) -> None:
        content = await request.aread()
        headers = {
            key: value
            for key, value in request.headers.items()
            if key.lower() not in SENSITIVE_HEADERS
        }
        payload = RequestPayload(
            method=request.method,
            url=redact_url(str(request.url)),
            headers=headers,
            body=_decode_body(content, request.headers.get("content-type", "")),
        )
        result = callback(payload)
        if result is not None:
            await result

    return hook


def redact_url(url: str) -> str:
    """Mascara tokens embutidos na URL (path do Telegram, query do Graph)."""
    url = _BOT_TOKEN_PATH.sub("/bot***", url, count=1)
    return _SECRET_QUERY.sub(r"\1***", url)
