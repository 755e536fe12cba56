"""
Configuration helpers for the Coinboard backend.

Settings are read from environment variables once per process so that
routers/services never touch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEV_JWT_SECRET = "coinboard-development-secret-change-me-0123456789"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    jwt_secret: str
    jwt_algorithm: str
    token_ttl_seconds: int
    log_level: str
    log_format: str
    cors_origins: tuple[str, ...]
    login_rate_limit: int
    login_rate_window_seconds: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _list(value: str | None) -> tuple[str, ...]:
        if not value:
            return ()
        return tuple(item.strip() for item in value.split(",") if item.strip())

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    jwt_secret = os.getenv("JWT_SECRET", "")
    if not jwt_secret:
        if app_env == "prod":
            raise RuntimeError("JWT_SECRET must be configured in production.")
        jwt_secret = DEV_JWT_SECRET

    return Settings(
        app_env=app_env,
        database_url=os.getenv("DATABASE_URL", ""),
        jwt_secret=jwt_secret,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        token_ttl_seconds=max(0, _int(os.getenv("TOKEN_TTL_SECONDS", "0"), 0)),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_format=(os.getenv("LOG_FORMAT") or "json").lower(),
        cors_origins=_list(os.getenv("CORS_ORIGINS")),
        login_rate_limit=_int(os.getenv("LOGIN_RATE_LIMIT", "10"), 10),
        login_rate_window_seconds=_int(os.getenv("LOGIN_RATE_WINDOW_SECONDS", "300"), 300),
    )
