"""Tests for the bearer token codec."""

from __future__ import annotations

import base64
import time

import jwt as pyjwt
import pytest

from coinboard.core.tokens import TokenCodec, TokenInvalidError, bearer_token

SECRET = "super-secret-jwt-token-for-testing-only-0123456789"


def _b64url_decode(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


class TestRoundTrip:
    @pytest.mark.parametrize("user_id", [1, 2, 42, 10**9])
    def test_decode_returns_encoded_id(self, user_id: int) -> None:
        codec = TokenCodec(SECRET)
        assert codec.decode(codec.encode(user_id)) == user_id

    def test_encode_is_deterministic_without_ttl(self) -> None:
        codec = TokenCodec(SECRET)
        assert codec.encode(7) == codec.encode(7)
        assert codec.encode(7) != codec.encode(8)

    def test_ttl_adds_expiry(self) -> None:
        codec = TokenCodec(SECRET, ttl_seconds=60)
        payload = pyjwt.decode(codec.encode(3), SECRET, algorithms=["HS256"])
        assert payload["userId"] == 3
        assert payload["exp"] > time.time()


class TestRejection:
    def test_every_flipped_signature_byte_is_rejected(self) -> None:
        codec = TokenCodec(SECRET)
        header, payload, signature = codec.encode(1).split(".")
        raw = _b64url_decode(signature)
        for index in range(len(raw)):
            tampered = bytearray(raw)
            tampered[index] ^= 0x01
            token = ".".join([header, payload, _b64url_encode(bytes(tampered))])
            with pytest.raises(TokenInvalidError):
                codec.decode(token)

    def test_other_secret_is_rejected(self) -> None:
        token = TokenCodec("another-secret-that-is-long-enough-0123456789").encode(1)
        with pytest.raises(TokenInvalidError):
            TokenCodec(SECRET).decode(token)

    def test_known_foreign_token_is_rejected(self) -> None:
        foreign = (
            "eyJhbGciOiJIUzI1NiJ9."
            "eyJ1c2VySWQiOjF9.PdEMJWhmPP4redDYU1ovusV_"
            "5el6JSQW5D2CGiABCDE"
        )
        with pytest.raises(TokenInvalidError):
            TokenCodec(SECRET).decode(foreign)

    def test_other_algorithm_is_rejected(self) -> None:
        token = pyjwt.encode({"userId": 1}, SECRET, algorithm="HS512")
        with pytest.raises(TokenInvalidError):
            TokenCodec(SECRET).decode(token)

    def test_expired_token_is_rejected(self) -> None:
        token = pyjwt.encode({"userId": 1, "exp": int(time.time()) - 60}, SECRET, algorithm="HS256")
        with pytest.raises(TokenInvalidError):
            TokenCodec(SECRET).decode(token)

    @pytest.mark.parametrize("token", ["", "not.a.jwt", "garbage"])
    def test_malformed_token_is_rejected(self, token: str) -> None:
        with pytest.raises(TokenInvalidError):
            TokenCodec(SECRET).decode(token)

    def test_missing_user_id_is_rejected(self) -> None:
        token = pyjwt.encode({"sub": "1"}, SECRET, algorithm="HS256")
        with pytest.raises(TokenInvalidError):
            TokenCodec(SECRET).decode(token)

    def test_non_integer_user_id_is_rejected(self) -> None:
        token = pyjwt.encode({"userId": "1"}, SECRET, algorithm="HS256")
        with pytest.raises(TokenInvalidError):
            TokenCodec(SECRET).decode(token)

    def test_empty_secret_is_refused(self) -> None:
        with pytest.raises(ValueError):
            TokenCodec("")


class TestBearerToken:
    def test_extracts_credential(self) -> None:
        assert bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"
        assert bearer_token("bearer   abc") == "abc"

    @pytest.mark.parametrize("header", [None, "", "Basic dXNlcjpwYXNz", "Bearer", "Bearer   "])
    def test_returns_none_without_bearer_credential(self, header) -> None:
        assert bearer_token(header) is None
