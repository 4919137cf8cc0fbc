"""Testes para validação de assinaturas HMAC de webhooks."""

from __future__ import annotations

import base64
import hashlib
import hmac

from messaging_api.infra.crypto.signature import (
    compute_appsecret_proof,
    verify_line_signature,
    verify_messenger_signature,
    verify_viber_signature,
)

BODY = b'{"destination":"U1","events":[]}'
SECRET = "channel-secret"


def _line_signature(body: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


class TestLineSignature:
    def test_valid_signature(self) -> None:
        assert verify_line_signature(BODY, SECRET, _line_signature(BODY, SECRET)) is True

    def test_accepts_str_body(self) -> None:
        signature = _line_signature(BODY, SECRET)
        assert verify_line_signature(BODY.decode("utf-8"), SECRET, signature) is True

    def test_wrong_secret(self) -> None:
        signature = _line_signature(BODY, "other")
        assert verify_line_signature(BODY, SECRET, signature) is False

    def test_tampered_body(self) -> None:
        signature = _line_signature(BODY, SECRET)
        assert verify_line_signature(BODY + b" ", SECRET, signature) is False

    def test_invalid_base64_returns_false(self) -> None:
        assert verify_line_signature(BODY, SECRET, "not base64!!") is False

    def test_empty_signature_returns_false(self) -> None:
        assert verify_line_signature(BODY, SECRET, "") is False
        assert verify_line_signature(BODY, SECRET, None) is False


class TestMessengerSignature:
    def test_sha256_signature(self) -> None:
        digest = hmac.new(b"app-secret", BODY, hashlib.sha256).hexdigest()
        assert verify_messenger_signature(BODY, "app-secret", f"sha256={digest}") is True

    def test_legacy_sha1_signature(self) -> None:
        digest = hmac.new(b"app-secret", BODY, hashlib.sha1).hexdigest()
        assert verify_messenger_signature(BODY, "app-secret", f"sha1={digest}") is True

    def test_unknown_algorithm(self) -> None:
        assert verify_messenger_signature(BODY, "app-secret", "md5=abc") is False

    def test_missing_prefix(self) -> None:
        digest = hmac.new(b"app-secret", BODY, hashlib.sha256).hexdigest()
        assert verify_messenger_signature(BODY, "app-secret", digest) is False


def test_viber_signature_uses_auth_token() -> None:
    digest = hmac.new(b"viber-token", BODY, hashlib.sha256).hexdigest()

    assert verify_viber_signature(BODY, "viber-token", digest) is True
    assert verify_viber_signature(BODY, "other-token", digest) is False


def test_appsecret_proof() -> None:
    expected = hmac.new(b"app-secret", b"page-token", hashlib.sha256).hexdigest()

    assert compute_appsecret_proof("page-token", "app-secret") == expected
