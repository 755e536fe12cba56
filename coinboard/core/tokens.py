"""Bearer token codec (HS256 JWT carrying the user id)."""

from __future__ import annotations

import time

import jwt as pyjwt

USER_ID_CLAIM = "userId"


class TokenInvalidError(Exception):
    """Token could not be decoded: bad signature, malformed, expired or missing claims."""


class TokenCodec:
    """Encode/decode identity tokens with a process-wide signing secret.

    With ``ttl_seconds == 0`` no ``exp`` claim is written, which keeps
    ``encode`` deterministic for a given secret and user id.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl_seconds: int = 0):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl_seconds = max(0, ttl_seconds)

    def encode(self, user_id: int) -> str:
        payload: dict[str, object] = {USER_ID_CLAIM: int(user_id)}
        if self._ttl_seconds:
            payload["exp"] = int(time.time()) + self._ttl_seconds
        return pyjwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> int:
        """Return the user id carried by ``token``.

        Raises:
            TokenInvalidError: signature mismatch, other algorithm, malformed
                structure, expired token, or missing/non-integer user id.
        """
        if not token:
            raise TokenInvalidError("Empty token")
        try:
            payload = pyjwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": [USER_ID_CLAIM]},
            )
        except pyjwt.PyJWTError as exc:
            raise TokenInvalidError(str(exc)) from exc
        user_id = payload.get(USER_ID_CLAIM)
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise TokenInvalidError("userId claim must be an integer")
        return user_id


def bearer_token(header: str | None) -> str | None:
    """Extract the credential from an ``Authorization: Bearer <token>`` value.

    Returns None when the header is absent or uses another scheme.
    """
    if not header:
        return None
    scheme, _, credential = header.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return credential.strip() or None
