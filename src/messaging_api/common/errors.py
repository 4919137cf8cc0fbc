"""Erro imprimível para falhas de API dos provedores.

Todos os clientes levantam ``MessagingApiError`` para erros de transporte
e erros reportados pelo provedor. O erro carrega request e response
originais do httpx e sabe renderizar um relatório legível para debug:

    Error Message -
      LINE API - The request body has 1 error(s)

    Request -
      POST https://api.line.me/v2/bot/message/push

    Request Data -
      {
        "to": "U123"
      }

    Response -
      400 Bad Request

    Response Data -
      {
        "message": "..."
      }
"""

from __future__ import annotations

import json
from typing import Any

import httpx


def _indent(text: str) -> str:
    return "\n".join(f"  {line}" if line else "" for line in text.split("\n"))


def _pretty(raw: bytes | str) -> str:
    """Formata JSON indentado; se não for JSON, devolve o texto bruto."""
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    try:
        return json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except ValueError:
        return text


class MessagingApiError(Exception):
    """Erro de API com request/response anexados.

    Attributes:
        message: Mensagem legível (ex: "Telegram API - 400 Bad Request: chat not found")
        request: Request httpx que originou o erro (quando houver)
        response: Response httpx recebida (quando houver)
        status_code: Status HTTP da response (quando houver)
        provider_code: Código de erro próprio do provedor (errcode, status, code)
        is_retryable: True se a falha é transitória
    """

    def __init__(
        self,
        message: str | Exception,
        request: httpx.Request | None = None,
        response: httpx.Response | None = None,
        *,
        provider_code: Any = None,
        is_retryable: bool = False,
    ) -> None:
        if isinstance(message, Exception):
            cause = message
            message = str(cause)
            if isinstance(cause, httpx.HTTPStatusError):
                request = request or cause.request
                response = response or cause.response
            elif isinstance(cause, httpx.RequestError):
                request = request or _safe_request(cause)
        super().__init__(message)
        self.message = message
        self.request = request if request is not None else _response_request(response)
        self.response = response
        self.status_code = response.status_code if response is not None else None
        self.provider_code = provider_code
        self.is_retryable = is_retryable

    def format_report(self) -> str:
        """Renderiza relatório com mensagem, request e response.

        Seções sem dados são omitidas.

        Returns:
            Texto multilinha pronto para log ou console.
        """
        sections = [f"Error Message -\n{_indent(self.message)}"]

        if self.request is not None:
            sections.append(
                f"Request -\n  {self.request.method.upper()} {self.request.url}"
            )
            body = _request_body(self.request)
            if body:
                sections.append(f"Request Data -\n{_indent(_pretty(body))}")

        if self.response is not None:
            sections.append(
                f"Response -\n  {self.response.status_code} {self.response.reason_phrase}"
            )
            if self.response.content:
                sections.append(
                    f"Response Data -\n{_indent(_pretty(self.response.content))}"
                )

        return "\n\n".join(sections) + "\n"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code!r}, provider_code={self.provider_code!r})"
        )


def _safe_request(error: httpx.RequestError) -> httpx.Request | None:
    try:
        return error.request
    except RuntimeError:
        # httpx levanta RuntimeError quando o erro foi criado sem request
        return None


def _response_request(response: httpx.Response | None) -> httpx.Request | None:
    if response is None:
        return None
    try:
        return response.request
    except RuntimeError:
        return None


def _request_body(request: httpx.Request) -> bytes:
    try:
        return request.content
    except httpx.RequestNotRead:
        return b""
