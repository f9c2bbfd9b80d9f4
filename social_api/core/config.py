"""
Configuration helpers for the social graph backend.

Exposes a frozen Settings object read from environment variables so that
routers/services do not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEV_DATABASE_URL = "sqlite:///./social_api.db"
# Only honoured outside production, see session_service.get_signing_key.
DEV_JWT_SECRET = "dev-insecure-secret"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    jwt_secret: str
    jwt_algorithm: str
    token_ttl_seconds: int
    log_level: str
    auto_create_tables: bool

    @property
    def is_production(self) -> bool:
        return self.app_env == "prod"


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    database_url = (os.getenv("DATABASE_URL") or "").strip()
    if not database_url and app_env != "prod":
        database_url = DEV_DATABASE_URL

    return Settings(
        app_env=app_env,
        database_url=database_url,
        jwt_secret=os.getenv("JWT_SECRET", ""),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        token_ttl_seconds=_int(os.getenv("TOKEN_TTL_SECONDS", "604800"), 604800),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        auto_create_tables=_bool(os.getenv("AUTO_CREATE_TABLES"), True),
    )
