"""
Authentication and identity related use cases.
"""

from __future__ import annotations

from dataclasses import dataclass

from social_api.core.errors import InvalidCredentialsError, NotFoundError
from social_api.core.logging import get_logger
from social_api.core.security import hash_password, password_needs_rehash, verify_password
from social_api.db.models import Account
from social_api.domain.accounts import AccountDraft, normalize_email
from social_api.services.account_service import AccountService
from social_api.services.session_service import get_signing_key, issue_token

logger = get_logger(__name__)


@dataclass
class AuthResult:
    account: Account
    token: str


@dataclass
class AuthService:
    """Handles signup and login flows."""

    def __post_init__(self):
        self.accounts = AccountService()

    # -------------------------------------- signup --------------------------------------
    def signup(self, draft: AccountDraft) -> AuthResult:
        # Fail before the write when the signing key is unavailable.
        get_signing_key()
        account = self.accounts.create(draft)
        return AuthResult(account=account, token=issue_token(account.id))

    # -------------------------------------- login --------------------------------------
    def login(self, email: str | None, password: str | None) -> AuthResult:
        raw_email = normalize_email(email)
        if not raw_email or not password:
            raise InvalidCredentialsError()
        try:
            account = self.accounts.find_by_email(raw_email)
        except NotFoundError:
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError() from None
        if not verify_password(password, account.password_hash):
            logger.info("Login failed for account %s", account.id)
            raise InvalidCredentialsError()
        if password_needs_rehash(account.password_hash):
            self.accounts.repository.update_account(account.id, {"password_hash": hash_password(password)})
        return AuthResult(account=account, token=issue_token(account.id))
