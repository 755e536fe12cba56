"""Shared router helpers: service lookup on app.state and request identity."""
from __future__ import annotations

from typing import Optional

from fastapi import Request

from coinboard.core.errors import UnauthenticatedError
from coinboard.services.auth_service import AuthService
from coinboard.services.coin_service import CoinService
from coinboard.services.comment_service import CommentService
from coinboard.services.user_service import UserService


def _state_service(request: Request, name: str):
    svc = getattr(getattr(request.app, "state", None), name, None)
    if svc is None:
        raise RuntimeError(f"{name} not configured")
    return svc


def get_auth_service(request: Request) -> AuthService:
    return _state_service(request, "auth_service")


def get_user_service(request: Request) -> UserService:
    return _state_service(request, "user_service")


def get_coin_service(request: Request) -> CoinService:
    return _state_service(request, "coin_service")


def get_comment_service(request: Request) -> CommentService:
    return _state_service(request, "comment_service")


def optional_user_id(request: Request) -> Optional[int]:
    """User id from the bearer token; None when no Authorization header was sent."""
    return get_auth_service(request).identify(request.headers.get("authorization"))


def current_user_id(request: Request) -> int:
    """User id from the bearer token; 401 when missing or invalid."""
    user_id = optional_user_id(request)
    if user_id is None:
        raise UnauthenticatedError()
    return user_id
