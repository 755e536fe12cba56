"""Coinboard API: FastAPI application wiring.

Services are built once with explicit collaborators and stored on
``app.state``; routers look them up from there.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coinboard.core.config import get_settings
from coinboard.core.errors import CoinboardError
from coinboard.core.observability import setup_logging
from coinboard.core.tokens import TokenCodec
from coinboard.db.create_tables import create_all
from coinboard.routers import coins as coins_router
from coinboard.routers import comments as comments_router
from coinboard.routers import session as session_router
from coinboard.routers import users as users_router
from coinboard.services.auth_service import AuthService
from coinboard.services.coin_service import CoinService
from coinboard.services.comment_service import CommentService
from coinboard.services.user_service import UserService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    create_all()
    logger.info("Coinboard API started")
    yield
    logger.info("Coinboard API shutting down")


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CoinboardError)
    async def coinboard_error_handler(request: Request, exc: CoinboardError):
        log = logger.warning if exc.http_status < 500 else logger.error
        log(f"{type(exc).__name__}: {exc.message}", extra={"error_code": exc.code, "path": request.url.path})
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Invalid request data",
                    "details": [
                        {
                            "field": ".".join(str(loc) for loc in e["loc"]),
                            "message": e["msg"],
                            "type": e["type"],
                        }
                        for e in exc.errors()
                    ],
                },
            },
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"}},
        )


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    settings = get_settings()
    app = FastAPI(title="Coinboard API", lifespan=lifespan)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    codec = TokenCodec(settings.jwt_secret, settings.jwt_algorithm, settings.token_ttl_seconds)
    app.state.auth_service = AuthService(codec=codec)
    app.state.user_service = UserService()
    app.state.coin_service = CoinService()
    app.state.comment_service = CommentService()

    app.include_router(session_router.router)
    app.include_router(users_router.router)
    app.include_router(coins_router.router)
    app.include_router(comments_router.router)

    _register_error_handlers(app)
    return app
