"""
Account store use cases: creation, lookup, whitelisted updates and deletion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from sqlalchemy.exc import IntegrityError

from social_api.core.errors import DuplicateEmailError, NotFoundError, ValidationError
from social_api.core.logging import get_logger
from social_api.core.security import hash_password
from social_api.db.models import DEFAULT_PROFILE_PICTURE, Account
from social_api.domain.accounts import (
    LOCATION_MAX_LENGTH,
    URL_MAX_LENGTH,
    AccountDraft,
    clean_bio,
    clean_email,
    clean_is_private,
    clean_name,
    clean_optional_text,
    clean_password,
    clean_patch,
    clean_profile_picture,
    normalize_email,
)
from social_api.repositories.sql_repository import SQLRepository

logger = get_logger(__name__)


@dataclass
class AccountService:
    """Validates account writes before they reach the repository."""

    def __post_init__(self):
        self.repository = SQLRepository()

    def create(self, draft: AccountDraft) -> Account:
        if not draft.name or not draft.email or not draft.password:
            raise ValidationError("Name, email, and password are required")
        name = clean_name(draft.name)
        email = clean_email(draft.email)
        password = clean_password(draft.password)
        bio = clean_bio(draft.bio)
        profile_picture = clean_profile_picture(draft.profile_picture, DEFAULT_PROFILE_PICTURE)
        website = clean_optional_text("website", draft.website, URL_MAX_LENGTH)
        location = clean_optional_text("location", draft.location, LOCATION_MAX_LENGTH)
        is_private = False if draft.is_private is None else clean_is_private(draft.is_private)

        if self.repository.get_account_by_email(email):
            raise DuplicateEmailError()
        try:
            account = self.repository.create_account(
                name=name,
                email=email,
                password_hash=hash_password(password),
                bio=bio,
                profile_picture=profile_picture,
                website=website,
                location=location,
                is_private=is_private,
            )
        except IntegrityError as exc:
            # Another request registered the same email in between.
            raise DuplicateEmailError() from exc
        logger.info("Account created id=%s", account.id)
        return account

    def find_by_id(self, account_id: str) -> Account:
        account = self.repository.get_account(account_id)
        if not account:
            raise NotFoundError()
        return account

    def find_by_email(self, email: str) -> Account:
        account = self.repository.get_account_by_email(normalize_email(email))
        if not account:
            raise NotFoundError()
        return account

    def list_all(self) -> list[Account]:
        """All accounts, newest first."""
        return self.repository.list_accounts()

    def update(self, account_id: str, patch: Mapping[str, Any]) -> Account:
        if not isinstance(patch, Mapping):
            raise ValidationError("Update payload must be an object")
        if not self.repository.account_exists(account_id):
            raise NotFoundError()
        values = clean_patch(patch, DEFAULT_PROFILE_PICTURE)
        if patch.get("password") is not None:
            values["password_hash"] = hash_password(clean_password(patch["password"]))
        if not values:
            return self.find_by_id(account_id)
        account = self.repository.update_account(account_id, values)
        if not account:
            raise NotFoundError()
        logger.info("Account updated id=%s fields=%s", account_id, sorted(values))
        return account

    def delete(self, account_id: str) -> None:
        if not self.repository.delete_account(account_id):
            raise NotFoundError()
        logger.info("Account deleted id=%s", account_id)
