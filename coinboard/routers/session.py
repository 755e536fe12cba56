from __future__ import annotations

from fastapi import APIRouter, Depends, status

from coinboard.core.rate_limiter import login_rate_limit
from coinboard.routers.deps import get_auth_service
from coinboard.schemas import LoginRequest, TokenResponse
from coinboard.services.auth_service import AuthService

router = APIRouter(tags=["session"])


@router.post(
    "/session",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(login_rate_limit)],
)
def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    return TokenResponse(access_token=auth.login(payload.email, payload.password))


@router.get("/health")
def health():
    return {"status": "ok"}
