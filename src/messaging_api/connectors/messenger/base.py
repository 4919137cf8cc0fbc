"""Cliente HTTP base da Graph API para a Messenger Platform.

Responsabilidades:
- access_token como query param em toda chamada
- appsecret_proof calculado para o token efetivamente usado
- corpo JSON convertido para snake_case
- erros Graph convertidos em MessagingApiError
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from messaging_api.common.api_logging import log_api_error, log_success
from messaging_api.common.case import snakecase_keys_deep
from messaging_api.config.settings.messenger import GRAPH_API_BASE_URL, GRAPH_API_VERSION
from messaging_api.connectors.messenger.errors import to_messaging_error
from messaging_api.infra.crypto.signature import (
    compute_appsecret_proof,
    verify_messenger_signature,
)
from messaging_api.infra.http import HttpClient, HttpClientConfig

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

    from messaging_api.common.request import RequestPayload

logger = logging.getLogger(__name__)

PROVIDER = "messenger"


def extract_version(version: str) -> str:
    """Remove o prefixo "v" da versão (``v6.0`` -> ``6.0``)."""
    return version[1:] if version.startswith("v") else version


class MessengerBaseClient(HttpClient):
    """Transporte autenticado para a Graph API."""

    def __init__(
        self,
        access_token: str,
        *,
        app_id: str | None = None,
        app_secret: str | None = None,
        version: str = GRAPH_API_VERSION,
        origin: str = GRAPH_API_BASE_URL,
        skip_app_secret_proof: bool | None = None,
        config: HttpClientConfig | None = None,
        on_request: Callable[[RequestPayload], Awaitable[None] | None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Inicializa cliente Messenger.

        Args:
            access_token: Page access token
            app_id: ID do app (subscriptions, debug_token)
            app_secret: App secret (appsecret_proof, assinatura de webhook)
            version: Versão da Graph API, com ou sem "v"
            origin: Origem da Graph API
            skip_app_secret_proof: None = pular quando não há app_secret
            config: Configuração HTTP (timeout, retries)
            on_request: Callback chamado com cada request de saída
            transport: Transporte httpx alternativo (ex: MockTransport)

        Raises:
            ValueError: appsecret_proof exigido sem app_secret.
        """
        if skip_app_secret_proof is None:
            skip_app_secret_proof = not app_secret
        if not skip_app_secret_proof and not app_secret:
            raise ValueError(
                "app_secret é obrigatório quando skip_app_secret_proof é False"
            )

        self._version = extract_version(version)
        super().__init__(
            f"{origin.rstrip('/')}/v{self._version}/",
            config=config,
            on_request=on_request,
            transport=transport,
        )
        self._access_token = access_token
        self._app_id = app_id
        self._app_secret = app_secret
        self._skip_app_secret_proof = skip_app_secret_proof

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def version(self) -> str:
        return self._version

    @property
    def app_id(self) -> str | None:
        return self._app_id

    def verify_signature(self, body: bytes | str, signature: str | None) -> bool:
        """Valida X-Hub-Signature(-256) com o app secret configurado."""
        if not self._app_secret:
            return False
        return verify_messenger_signature(body, self._app_secret, signature)

    def _app_access_token(self, app_access_token: str | None = None) -> str:
        """Token de app (``app_id|app_secret``) para endpoints de app.

        Raises:
            ValueError: Sem app_id ou sem app_secret/token de app.
        """
        if not self._app_id:
            raise ValueError("app_id é obrigatório para esta operação")
        if app_access_token:
            return app_access_token
        if not self._app_secret:
            raise ValueError("app_secret ou token de app é obrigatório para esta operação")
        return f"{self._app_id}|{self._app_secret}"

    def _auth_params(self, access_token: str | None) -> dict[str, str]:
        token = access_token or self._access_token
        params = {"access_token": token}
        if not self._skip_app_secret_proof and self._app_secret:
            params["appsecret_proof"] = compute_appsecret_proof(token, self._app_secret)
        return params

    async def _call(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        access_token: str | None = None,
    ) -> Any:
        """Executa chamada autenticada e devolve o JSON de resposta.

        Raises:
            MessagingApiError: Status de erro ou objeto ``error`` no corpo.
        """
        query = {key: value for key, value in (params or {}).items() if value is not None}
        query.update(self._auth_params(access_token))

        kwargs: dict[str, Any] = {"params": query}
        if json is not None:
            kwargs["json"] = snakecase_keys_deep(json)
        if data is not None:
            kwargs["data"] = data
        if files is not None:
            kwargs["files"] = files

        response = await self.request(method, path, **kwargs)
        if response.is_error:
            error = to_messaging_error(response)
            log_api_error(PROVIDER, error, method, path)
            raise error

        log_success(PROVIDER, method, path, response.status_code)
        if not response.content:
            return {}
        return response.json()
