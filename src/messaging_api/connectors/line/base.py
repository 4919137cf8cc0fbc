"""Cliente HTTP base da LINE Messaging API.

Converte corpo de request para camelCase e response para snake_case,
aplica override de access_token por chamada e padroniza erros.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from messaging_api.common.api_logging import log_api_error, log_success
from messaging_api.common.case import camelcase_keys_deep, snakecase_keys_deep
from messaging_api.config.settings.line import LINE_API_ORIGIN, LINE_DATA_ORIGIN
from messaging_api.connectors.line.errors import parse_line_error
from messaging_api.infra.crypto.signature import verify_line_signature
from messaging_api.infra.http import HttpClient, HttpClientConfig

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

    from messaging_api.common.request import RequestPayload

logger = logging.getLogger(__name__)

PROVIDER = "line"


class LineBaseClient(HttpClient):
    """Transporte autenticado para a LINE Messaging API."""

    def __init__(
        self,
        access_token: str,
        channel_secret: str = "",
        *,
        origin: str = LINE_API_ORIGIN,
        data_origin: str = LINE_DATA_ORIGIN,
        config: HttpClientConfig | None = None,
        on_request: Callable[[RequestPayload], Awaitable[None] | None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Inicializa cliente LINE.

        Args:
            access_token: Channel access token (Bearer)
            channel_secret: Channel secret, usado só para validar webhooks
            origin: Origem da API (útil para testes e proxies)
            data_origin: Origem da API de conteúdo binário
            config: Configuração HTTP (timeout, retries)
            on_request: Callback chamado com cada request de saída
            transport: Transporte httpx alternativo (ex: MockTransport)
        """
        super().__init__(
            f"{origin.rstrip('/')}/",
            headers={"Authorization": f"Bearer {access_token}"},
            config=config,
            on_request=on_request,
            transport=transport,
        )
        self._access_token = access_token
        self._channel_secret = channel_secret
        self._data_origin = data_origin.rstrip("/")

    @property
    def access_token(self) -> str:
        return self._access_token

    def data_url(self, path: str) -> str:
        """URL absoluta na origem de dados (conteúdo binário)."""
        return f"{self._data_origin}/{path.lstrip('/')}"

    def verify_signature(self, body: bytes | str, signature: str | None) -> bool:
        """Valida X-Line-Signature com o channel secret configurado."""
        return verify_line_signature(body, self._channel_secret, signature)

    async def _execute(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        access_token: str | None = None,
        allow_not_found: bool = False,
    ) -> httpx.Response | None:
        """Executa chamada e levanta MessagingApiError em status de erro.

        Returns:
            Response, ou None quando ``allow_not_found`` e status 404.
        """
        request_headers = dict(headers or {})
        if access_token is not None:
            request_headers["Authorization"] = f"Bearer {access_token}"

        kwargs: dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = camelcase_keys_deep(json)
        if params:
            kwargs["params"] = params
        if content is not None:
            kwargs["content"] = content
        if request_headers:
            kwargs["headers"] = request_headers

        response = await self.request(method, path, **kwargs)

        if allow_not_found and response.status_code == 404:
            return None
        if response.is_error:
            error = parse_line_error(response)
            log_api_error(PROVIDER, error, method, path)
            raise error

        log_success(PROVIDER, method, path, response.status_code)
        return response

    async def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        """Executa chamada JSON e devolve corpo em snake_case."""
        response = await self._execute(method, path, **kwargs)
        if response is None:
            return None
        if not response.content:
            return {}
        return snakecase_keys_deep(response.json())

    async def _download(self, path: str, **kwargs: Any) -> bytes | None:
        response = await self._execute("GET", path, **kwargs)
        return None if response is None else response.content
