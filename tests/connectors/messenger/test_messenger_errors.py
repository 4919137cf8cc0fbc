"""Testes para classificação de erros da Graph API."""

from __future__ import annotations

import httpx
import pytest

from messaging_api.connectors.messenger.errors import (
    is_permanent_error,
    parse_graph_error,
    to_messaging_error,
)


class TestIsPermanentError:
    @pytest.mark.parametrize("code", [1, 2, 4, 17, 32, 613])
    def test_transient_codes(self, code: int) -> None:
        assert is_permanent_error(code, "OAuthException", 400) is False

    @pytest.mark.parametrize("code", [10, 100, 190, 200, 551])
    def test_known_permanent_codes(self, code: int) -> None:
        assert is_permanent_error(code, "unknown", 500) is True

    def test_unknown_code_on_client_error_is_permanent(self) -> None:
        assert is_permanent_error(2018001, "unknown", 400) is True

    def test_unknown_code_without_status_is_permanent(self) -> None:
        assert is_permanent_error(2018001, "unknown") is True

    @pytest.mark.parametrize("status_code", [429, 500, 503])
    def test_unknown_code_on_rate_limit_or_server_error_is_transient(
        self, status_code: int
    ) -> None:
        assert is_permanent_error(2018001, "unknown", status_code) is False


def test_parse_graph_error_returns_none_without_error() -> None:
    assert parse_graph_error({"recipient_id": "1"}) is None
    assert parse_graph_error(None) is None


def test_unknown_graph_error_is_not_retryable() -> None:
    """Erro com código desconhecido e HTTP 400 não deve ser reenviado."""
    response = httpx.Response(
        400,
        json={"error": {"message": "Weird", "type": "CustomException", "code": 9999}},
        request=httpx.Request("POST", "https://graph.facebook.com/v6.0/me/messages"),
    )

    error = to_messaging_error(response)

    assert error.message == "Messenger API - 9999 CustomException Weird"
    assert error.is_retryable is False


def test_unknown_graph_error_on_server_error_is_retryable() -> None:
    response = httpx.Response(
        502,
        json={"error": {"message": "Bad gateway", "type": "CustomException", "code": 9999}},
        request=httpx.Request("POST", "https://graph.facebook.com/v6.0/me/messages"),
    )

    assert to_messaging_error(response).is_retryable is True
