"""Cliente HTTP base compartilhado pelos clientes de provedores."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from messaging_api.common.errors import MessagingApiError
from messaging_api.common.request import create_request_hook

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from messaging_api.common.request import RequestPayload

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429})

# Falhas antes do envio do request
RETRYABLE_EXCEPTIONS = (httpx.ConnectError, httpx.ConnectTimeout, httpx.PoolTimeout)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 30.0
    max_retries: int = 3
    backoff_base_seconds: float = 2.0
    backoff_max_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpClient:
    """Cliente HTTP persistente com retry para rate limit e falhas de conexão.

    Não reenvia requests que receberam 5xx nem que estouraram timeout de
    leitura ou escrita: a maioria das chamadas é envio de mensagem e o
    provedor pode já ter entregue.
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        headers: dict[str, str] | None = None,
        config: HttpClientConfig | None = None,
        on_request: Callable[[RequestPayload], Awaitable[None] | None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={**self._config.default_headers, **(headers or {})},
            timeout=self._config.timeout_seconds,
            verify=self._config.verify_ssl,
            transport=transport,
            event_hooks={"request": [create_request_hook(on_request)]},
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Executa request com retry.

        Args:
            method: Método HTTP.
            url: URL absoluta ou relativa ao base_url.
            **kwargs: Repassados a ``httpx.AsyncClient.request``
                (params, json, data, files, content, headers).

        Returns:
            Response httpx com qualquer status. Quem chama interpreta erros.

        Raises:
            MessagingApiError: Se a conexão falhar após todas as tentativas.
        """
        for attempt in range(self._config.max_retries + 1):
            try:
                response = await self._client.request(method, url, **kwargs)
            except (httpx.ReadTimeout, httpx.WriteTimeout) as exc:
                logger.warning(
                    "http_timeout_after_send",
                    extra={"method": method, "endpoint": url, "attempts": attempt + 1},
                )
                raise MessagingApiError(exc, is_retryable=True) from exc
            except RETRYABLE_EXCEPTIONS as exc:
                if attempt >= self._config.max_retries:
                    logger.warning(
                        "http_connection_error",
                        extra={"method": method, "endpoint": url, "attempts": attempt + 1},
                    )
                    raise MessagingApiError(exc, is_retryable=True) from exc
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
                continue

            if (
                response.status_code in RETRYABLE_STATUS_CODES
                and attempt < self._config.max_retries
            ):
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
                continue
            return response

        raise MessagingApiError("http_retry_exhausted", is_retryable=True)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


async def _backoff_sleep(attempt: int, base: float, max_seconds: float) -> None:
    backoff = min((2**attempt) * base, max_seconds)
    logger.info("http_backoff", extra={"backoff_seconds": backoff})
    await asyncio.sleep(backoff)
