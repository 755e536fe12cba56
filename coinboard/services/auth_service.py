"""
Authentication use cases: login and request identity resolution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, ContextManager, Optional

from coinboard.core.errors import InvalidCredentialsError, UnauthenticatedError
from coinboard.core.security import verify_password
from coinboard.core.tokens import TokenCodec, TokenInvalidError, bearer_token
from coinboard.repositories.sql_repository import SQLRepository, unit_of_work

logger = logging.getLogger(__name__)


@dataclass
class AuthService:
    """Issues bearer tokens and turns Authorization headers into user ids."""

    codec: TokenCodec
    unit_of_work: Callable[[], ContextManager[SQLRepository]] = unit_of_work

    def login(self, email: str, password: str) -> str:
        raw_email = (email or "").strip()
        if not raw_email:
            raise InvalidCredentialsError()
        with self.unit_of_work() as repo:
            user = repo.get_active_user_by_email(raw_email)
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        return self.codec.encode(user.id)

    def identify(self, authorization: Optional[str]) -> Optional[int]:
        """Return the user id of the request, None when no credential was sent.

        A header that is present but not a decodable bearer token is
        ``UnauthenticatedError``, never a partial identity.
        """
        if not authorization or not authorization.strip():
            return None
        token = bearer_token(authorization)
        if token is None:
            raise UnauthenticatedError("Authorization header must be 'Bearer <token>'")
        try:
            return self.codec.decode(token)
        except TokenInvalidError as exc:
            logger.info("Rejected bearer token: %s", exc)
            raise UnauthenticatedError("Invalid or expired token") from exc
