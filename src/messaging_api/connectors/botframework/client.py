"""Cliente Bot Framework Connector (REST v3).

Autentica com client credentials (AppID/senha) no endpoint OAuth da
Microsoft; o token fica em cache até expirar.

Uso:
    async with BotFrameworkClient(app_id, app_secret, service_url) as client:
        await client.send_to_conversation(conversation_id, {"text": "Olá"})
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from messaging_api.common.api_logging import log_api_error, log_success
from messaging_api.common.case import camelcase_keys_deep, snakecase_keys_deep
from messaging_api.common.errors import MessagingApiError
from messaging_api.config.settings.botframework import (
    BOTFRAMEWORK_SCOPE,
    BOTFRAMEWORK_TOKEN_URL,
)
from messaging_api.infra.http import HttpClient, HttpClientConfig

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

    from messaging_api.common.request import RequestPayload
    from messaging_api.config.settings.botframework import BotFrameworkSettings
    from messaging_api.connectors.botframework.types import (
        Activity,
        AttachmentUpload,
        ConversationParameters,
    )

logger = logging.getLogger(__name__)

PROVIDER = "botframework"

# Margem para renovar o token antes do vencimento
TOKEN_EXPIRY_MARGIN_SECONDS = 60.0


def _to_body(value: BaseModel | dict[str, Any]) -> dict[str, Any]:
    if isinstance(value, BaseModel):
        value = value.model_dump(exclude_none=True, by_alias=True)
    return camelcase_keys_deep(value)


def parse_botframework_error(response: httpx.Response) -> MessagingApiError:
    """Converte ErrorResponse (``{"error": {"code", "message"}}``) em MessagingApiError."""
    try:
        data = response.json()
    except ValueError:
        data = None

    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        code = error.get("code")
        message = f"Bot Framework API - {code} {error.get('message', '')}"
    elif isinstance(data, dict) and "error_description" in data:
        code = data.get("error")
        message = f"Bot Framework API - {code} {data['error_description']}"
    else:
        code = None
        message = f"Bot Framework API - {response.status_code} {response.reason_phrase}"

    return MessagingApiError(
        message,
        response=response,
        provider_code=code,
        is_retryable=response.status_code == 429 or response.status_code >= 500,
    )


class BotFrameworkClient(HttpClient):
    """Cliente do Bot Framework Connector."""

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        service_url: str,
        *,
        token_url: str = BOTFRAMEWORK_TOKEN_URL,
        scope: str = BOTFRAMEWORK_SCOPE,
        config: HttpClientConfig | None = None,
        on_request: Callable[[RequestPayload], Awaitable[None] | None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Inicializa cliente Bot Framework.

        Args:
            app_id: Microsoft App ID
            app_secret: Microsoft App password
            service_url: serviceUrl do canal (vem nas activities recebidas)
            token_url: Endpoint OAuth de client credentials
            scope: Escopo solicitado no token
            config: Configuração HTTP (timeout, retries)
            on_request: Callback chamado com cada request de saída
            transport: Transporte httpx alternativo (ex: MockTransport)
        """
        super().__init__(
            f"{service_url.rstrip('/')}/v3/",
            config=config,
            on_request=on_request,
            transport=transport,
        )
        self._app_id = app_id
        self._app_secret = app_secret
        self._token_url = token_url
        self._scope = scope
        self._access_token = ""
        self._token_expires_at = 0.0
        self._token_lock = asyncio.Lock()

    @property
    def access_token(self) -> str:
        return self._access_token

    async def get_access_token(self) -> dict[str, Any]:
        """Solicita token OAuth (``access_token``, ``expires_in``).

        Raises:
            MessagingApiError: Credenciais rejeitadas.
        """
        response = await self.request(
            "POST",
            self._token_url,
            data={
                "grant_type": "client_credentials",
                "client_id": self._app_id,
                "client_secret": self._app_secret,
                "scope": self._scope,
            },
        )
        if response.is_error:
            error = parse_botframework_error(response)
            log_api_error(PROVIDER, error, "POST", "token")
            raise error
        return response.json()

    async def _refresh_token_when_expired(self) -> str:
        async with self._token_lock:
            if time.monotonic() >= self._token_expires_at:
                token = await self.get_access_token()
                expires_in = float(token.get("expires_in", 3600))
                self._access_token = token["access_token"]
                self._token_expires_at = (
                    time.monotonic() + expires_in - TOKEN_EXPIRY_MARGIN_SECONDS
                )
                logger.debug("botframework_token_refreshed", extra={"expires_in": expires_in})
        return self._access_token

    async def _call(self, method: str, path: str, body: Any = None) -> Any:
        """Executa chamada autenticada e devolve o corpo em snake_case.

        Raises:
            MessagingApiError: Status de erro.
        """
        token = await self._refresh_token_when_expired()
        kwargs: dict[str, Any] = {"headers": {"Authorization": f"Bearer {token}"}}
        if body is not None:
            kwargs["json"] = _to_body(body)

        response = await self.request(method, path, **kwargs)
        if response.is_error:
            error = parse_botframework_error(response)
            log_api_error(PROVIDER, error, method, path)
            raise error

        log_success(PROVIDER, method, path, response.status_code)
        if not response.content:
            return {}
        return snakecase_keys_deep(response.json())

    async def create_conversation(
        self, parameters: ConversationParameters | dict[str, Any]
    ) -> dict[str, Any]:
        """Cria conversa. Retorna ``{"id", "activity_id", "service_url"}``."""
        return await self._call("POST", "conversations", parameters)

    async def send_to_conversation(
        self, conversation_id: str, activity: Activity | dict[str, Any]
    ) -> dict[str, Any]:
        return await self._call(
            "POST", f"conversations/{conversation_id}/activities", activity
        )

    async def reply_to_activity(
        self,
        conversation_id: str,
        activity_id: str,
        activity: Activity | dict[str, Any],
    ) -> dict[str, Any]:
        """Responde em thread; ``reply_to_id`` é preenchido com activity_id."""
        body = _to_body(activity)
        body.setdefault("replyToId", activity_id)
        return await self._call(
            "POST", f"conversations/{conversation_id}/activities/{activity_id}", body
        )

    async def update_activity(
        self,
        conversation_id: str,
        activity_id: str,
        activity: Activity | dict[str, Any],
    ) -> dict[str, Any]:
        return await self._call(
            "PUT", f"conversations/{conversation_id}/activities/{activity_id}", activity
        )

    async def delete_activity(self, conversation_id: str, activity_id: str) -> dict[str, Any]:
        return await self._call(
            "DELETE", f"conversations/{conversation_id}/activities/{activity_id}"
        )

    async def get_conversation_members(self, conversation_id: str) -> list[dict[str, Any]]:
        return await self._call("GET", f"conversations/{conversation_id}/members")

    async def get_activity_members(
        self, conversation_id: str, activity_id: str
    ) -> list[dict[str, Any]]:
        return await self._call(
            "GET", f"conversations/{conversation_id}/activities/{activity_id}/members"
        )

    async def upload_attachment_to_channel(
        self,
        conversation_id: str,
        attachment: AttachmentUpload | dict[str, Any],
    ) -> dict[str, Any]:
        """Sobe anexo no canal. Retorna ``{"id": ...}``."""
        return await self._call(
            "POST", f"conversations/{conversation_id}/attachments", attachment
        )


def create_botframework_client(
    settings: BotFrameworkSettings | None = None, **kwargs: object
) -> BotFrameworkClient:
    """Factory para criar cliente Bot Framework a partir das settings.

    Args:
        settings: BotFrameworkSettings opcional. Se None, carrega do ambiente.
        **kwargs: Repassados ao construtor (on_request, transport).

    Returns:
        Cliente configurado.
    """
    # Import local para evitar dependência circular
    from messaging_api.config.settings.botframework import get_botframework_settings

    botframework = settings or get_botframework_settings()
    config = HttpClientConfig(
        timeout_seconds=botframework.request_timeout_seconds,
        max_retries=botframework.max_retries,
    )
    return BotFrameworkClient(
        botframework.app_id,
        botframework.app_secret,
        botframework.service_url,
        token_url=botframework.token_url,
        config=config,
        **kwargs,
    )
