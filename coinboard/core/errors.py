"""Error hierarchy shared by services and the HTTP boundary.

Every error carries a machine-readable code and the HTTP status the boundary
answers with. Services raise these and never swallow them; the handlers
registered in ``coinboard.app`` turn them into JSON envelopes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


class CoinboardError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str, code: str, http_status: int = 500, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_response(self) -> dict:
        body: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.details:
            body["details"] = self.details
        return {"error": body}


class NotFoundError(CoinboardError):
    """Requested entity does not exist (or is no longer active)."""

    entity_type = "Entity"

    def __init__(self, entity_id: Any, entity_type: str | None = None):
        kind = entity_type or self.entity_type
        super().__init__(
            f"{kind} '{entity_id}' not found",
            "NOT_FOUND",
            404,
            {"entity": kind, "id": entity_id},
        )
        self.entity_id = entity_id
        self.entity_type = kind


class UserNotFoundError(NotFoundError):
    entity_type = "User"


class CoinNotFoundError(NotFoundError):
    entity_type = "Coin"


class CommentNotFoundError(NotFoundError):
    entity_type = "Comment"


class EmailDuplicationError(CoinboardError):
    def __init__(self, email: str):
        super().__init__(f"Email '{email}' is already registered", "EMAIL_DUPLICATION", 409, {"email": email})
        self.email = email


class UnauthenticatedError(CoinboardError):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, "UNAUTHENTICATED", 401)


class InvalidCredentialsError(CoinboardError):
    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, "INVALID_CREDENTIALS", 401)


class ForbiddenError(CoinboardError):
    def __init__(self, message: str = "Not allowed to modify this resource"):
        super().__init__(message, "FORBIDDEN", 403)


class ValidationError(CoinboardError):
    def __init__(self, message: str, field: str):
        super().__init__(message, "VALIDATION_ERROR", 400, {"field": field})
        self.field = field


class TooManyRequestsError(CoinboardError):
    def __init__(self, message: str = "Too many requests. Try again shortly.", retry_after: int | None = None):
        details = {"retryAfter": retry_after} if retry_after is not None else None
        super().__init__(message, "RATE_LIMITED", 429, details)
