"""
Access guard: resolve the caller's account from a bearer token and enforce
owner-only mutations.
"""

from __future__ import annotations

from typing import Optional

from social_api.core.errors import ForbiddenError, InvalidTokenError, NotFoundError, UnauthorizedError
from social_api.core.logging import get_logger
from social_api.db.models import Account
from social_api.services.account_service import AccountService
from social_api.services.session_service import validate_token

logger = get_logger(__name__)

BEARER_PREFIX = "bearer "


def extract_token(authorization: Optional[str], query_token: Optional[str] = None) -> Optional[str]:
    """Prefer `Authorization: Bearer <token>`, fall back to the `token` query parameter."""
    header = (authorization or "").strip()
    if header.lower().startswith(BEARER_PREFIX):
        token = header[len(BEARER_PREFIX):].strip()
        if token:
            return token
    query_value = (query_token or "").strip()
    return query_value or None


class AccessGuard:
    def __init__(self, accounts: AccountService | None = None) -> None:
        self.accounts = accounts or AccountService()

    def authenticate(self, token: Optional[str]) -> Account:
        if not token:
            raise UnauthorizedError("Token missing")
        try:
            account_id = validate_token(token)
        except InvalidTokenError as exc:
            logger.info("Rejected token: %s", exc.code)
            raise UnauthorizedError(exc.message) from exc
        try:
            return self.accounts.find_by_id(account_id)
        except NotFoundError as exc:
            # Tokens outlive deleted accounts; this lookup is what rejects them.
            raise UnauthorizedError("Account no longer exists") from exc

    @staticmethod
    def authorize_owner(account: Account, target_id: str) -> None:
        if account.id != target_id:
            raise ForbiddenError()
