"""Session helpers (issue and validate signed bearer tokens).

Tokens are stateless JWTs: nothing is persisted and nothing can be revoked.
A token stays valid until it expires; the access guard's live account lookup
is what rejects tokens of deleted accounts.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from social_api.core.config import DEV_JWT_SECRET, get_settings
from social_api.core.errors import ConfigurationError, ExpiredTokenError, InvalidTokenError
from social_api.core.logging import get_logger

logger = get_logger(__name__)

_warned_fallback = False


def get_signing_key() -> str:
    """Return the configured secret, falling back to the dev key outside prod."""
    global _warned_fallback
    settings = get_settings()
    if settings.jwt_secret:
        return settings.jwt_secret
    if settings.is_production:
        raise ConfigurationError("JWT_SECRET must be configured in production.")
    if not _warned_fallback:
        logger.warning("JWT_SECRET is not set; using the insecure development secret")
        _warned_fallback = True
    return DEV_JWT_SECRET


def issue_token(account_id: str) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    claims = {"sub": account_id, "iat": int(now.timestamp())}
    if settings.token_ttl_seconds > 0:
        claims["exp"] = int((now + timedelta(seconds=settings.token_ttl_seconds)).timestamp())
    return jwt.encode(claims, get_signing_key(), algorithm=settings.jwt_algorithm)


def validate_token(token: str | None) -> str:
    """Return the account id bound to the token or raise InvalidTokenError/ExpiredTokenError."""
    if not token:
        raise InvalidTokenError("Token missing")
    settings = get_settings()
    try:
        payload = jwt.decode(token, get_signing_key(), algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as exc:
        raise ExpiredTokenError() from exc
    except JWTError as exc:
        raise InvalidTokenError() from exc

    account_id = payload.get("sub")
    if not account_id or not isinstance(account_id, str):
        raise InvalidTokenError("Invalid token payload")
    return account_id
