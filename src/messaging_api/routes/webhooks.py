"""Routers FastAPI para receber webhooks dos provedores.

Cada factory devolve um ``APIRouter`` com POST "/" (e GET "/" no
Messenger, para o desafio ``hub.challenge``). O payload validado é
entregue ao ``handler`` do serviço.

Fluxo do POST:
1. Valida assinatura/secret do provedor (401 se inválida)
2. Parseia JSON (400 se inválido)
3. Agenda o handler em background e responde 200 imediatamente
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request, Response, status

from messaging_api.common.correlation import (
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from messaging_api.common.webhook import (
    InvalidJsonError,
    InvalidSignatureError,
    WebhookChallengeError,
)
from messaging_api.connectors.line.webhook import (
    parse_webhook_request as parse_line_webhook,
)
from messaging_api.connectors.messenger.webhook import (
    parse_webhook_request as parse_messenger_webhook,
)
from messaging_api.connectors.messenger.webhook import verify_webhook_challenge
from messaging_api.connectors.telegram.webhook import (
    parse_webhook_request as parse_telegram_webhook,
)
from messaging_api.connectors.viber.webhook import (
    parse_webhook_request as parse_viber_webhook,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    WebhookHandler = Callable[[dict[str, Any]], Awaitable[None] | None]
    WebhookParser = Callable[[bytes, Mapping[str, str]], dict[str, Any]]

logger = logging.getLogger(__name__)

_background_tasks: set[asyncio.Task] = set()


async def _run_handler_safe(
    handler: WebhookHandler,
    payload: dict[str, Any],
    *,
    channel: str,
    correlation_id: str,
) -> None:
    """Executa handler sem propagar exceções (a resposta já foi enviada)."""
    token = set_correlation_id(correlation_id)
    try:
        result = handler(payload)
        if inspect.isawaitable(result):
            await result
    except Exception:
        logger.exception(
            "webhook_processing_failed",
            extra={"channel": channel, "correlation_id": correlation_id},
        )
    finally:
        reset_correlation_id(token)


def _text_response(content: str, status_code: int) -> Response:
    return Response(content=content, media_type="text/plain", status_code=status_code)


def _add_receive_route(
    router: APIRouter,
    *,
    channel: str,
    parse: WebhookParser,
    handler: WebhookHandler,
    background: bool,
) -> None:
    @router.post("/", response_model=None)
    async def receive_webhook(request: Request) -> Response | dict[str, Any]:
        """Recebe eventos, valida e agenda o handler."""
        token = set_correlation_id(request.headers.get("x-correlation-id"))
        try:
            raw_body = await request.body()
            try:
                payload = parse(raw_body, dict(request.headers))
            except InvalidSignatureError as exc:
                logger.warning(
                    "webhook_signature_invalid",
                    extra={
                        "channel": channel,
                        "correlation_id": get_correlation_id(),
                        "error": str(exc),
                    },
                )
                return _text_response("Unauthorized", status.HTTP_401_UNAUTHORIZED)
            except InvalidJsonError as exc:
                logger.warning(
                    "webhook_json_invalid",
                    extra={
                        "channel": channel,
                        "correlation_id": get_correlation_id(),
                        "error": str(exc),
                    },
                )
                return _text_response("Bad Request", status.HTTP_400_BAD_REQUEST)

            logger.info(
                "webhook_received",
                extra={
                    "channel": channel,
                    "correlation_id": get_correlation_id(),
                    "payload_size": len(raw_body),
                },
            )

            run = _run_handler_safe(
                handler, payload, channel=channel, correlation_id=get_correlation_id()
            )
            if background:
                task = asyncio.create_task(run)
                _background_tasks.add(task)
                task.add_done_callback(_background_tasks.discard)
            else:
                await run

            return {"status": "received", "correlation_id": get_correlation_id()}
        finally:
            reset_correlation_id(token)


def create_line_webhook_router(
    channel_secret: str,
    handler: WebhookHandler,
    *,
    background: bool = True,
) -> APIRouter:
    """Router LINE: valida X-Line-Signature; payload em snake_case.

    Args:
        channel_secret: Channel secret do canal
        handler: Recebe ``{"destination", "events"}``
        background: Se False, aguarda o handler antes de responder
    """
    router = APIRouter()
    _add_receive_route(
        router,
        channel="line",
        parse=lambda body, headers: parse_line_webhook(body, headers, channel_secret),
        handler=handler,
        background=background,
    )
    return router


def create_messenger_webhook_router(
    verify_token: str,
    app_secret: str | None,
    handler: WebhookHandler,
    *,
    background: bool = True,
) -> APIRouter:
    """Router Messenger: GET responde ao desafio, POST valida X-Hub-Signature.

    Args:
        verify_token: Token esperado em ``hub.verify_token``
        app_secret: App secret; sem ele a assinatura não é verificada
        handler: Recebe ``{"object", "entry"}``
        background: Se False, aguarda o handler antes de responder
    """
    router = APIRouter()

    @router.get("/")
    async def verify_webhook(request: Request) -> Response:
        """Responde ao challenge de verificação da Meta."""
        hub_mode = request.query_params.get("hub.mode")
        try:
            challenge = verify_webhook_challenge(
                hub_mode=hub_mode,
                hub_verify_token=request.query_params.get("hub.verify_token"),
                hub_challenge=request.query_params.get("hub.challenge"),
                expected_token=verify_token,
            )
        except WebhookChallengeError as exc:
            logger.warning(
                "webhook_verification_failed",
                extra={"channel": "messenger", "error": str(exc)},
            )
            return _text_response("Forbidden", status.HTTP_403_FORBIDDEN)

        logger.info(
            "webhook_verified", extra={"channel": "messenger", "hub_mode": hub_mode}
        )
        return _text_response(challenge, status.HTTP_200_OK)

    _add_receive_route(
        router,
        channel="messenger",
        parse=lambda body, headers: parse_messenger_webhook(body, headers, app_secret),
        handler=handler,
        background=background,
    )
    return router


def create_telegram_webhook_router(
    secret_token: str | None,
    handler: WebhookHandler,
    *,
    background: bool = True,
) -> APIRouter:
    """Router Telegram: valida X-Telegram-Bot-Api-Secret-Token quando configurado."""
    router = APIRouter()
    _add_receive_route(
        router,
        channel="telegram",
        parse=lambda body, headers: parse_telegram_webhook(body, headers, secret_token),
        handler=handler,
        background=background,
    )
    return router


def create_viber_webhook_router(
    auth_token: str,
    handler: WebhookHandler,
    *,
    background: bool = True,
) -> APIRouter:
    """Router Viber: valida X-Viber-Content-Signature com o auth token."""
    router = APIRouter()
    _add_receive_route(
        router,
        channel="viber",
        parse=lambda body, headers: parse_viber_webhook(body, headers, auth_token),
        handler=handler,
        background=background,
    )
    return router
