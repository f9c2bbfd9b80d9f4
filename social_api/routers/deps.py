"""FastAPI dependencies wiring the access guard into routes."""
from __future__ import annotations

from typing import Optional

from fastapi import Header, Query

from social_api.db.models import Account
from social_api.services.access_guard import AccessGuard, extract_token

_guard = AccessGuard()


def get_guard() -> AccessGuard:
    return _guard


def current_account(
    authorization: Optional[str] = Header(default=None),
    token: Optional[str] = Query(default=None),
) -> Account:
    """Resolve the authenticated account or raise UnauthorizedError (401)."""
    return _guard.authenticate(extract_token(authorization, token))
