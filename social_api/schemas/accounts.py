"""Pydantic schemas for account payloads.

AccountView is the only outward representation of an account. It is built
from the persisted record and has no password field.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from social_api.db.models import Account
from social_api.domain.accounts import AccountDraft


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AccountView(CamelModel):
    id: str
    name: str
    email: str
    bio: str = ""
    profile_picture: str
    website: Optional[str] = None
    location: Optional[str] = None
    is_private: bool = False
    followers: list[str] = Field(default_factory=list)
    following: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, account: Account) -> "AccountView":
        return cls(
            id=account.id,
            name=account.name,
            email=account.email,
            bio=account.bio or "",
            profile_picture=account.profile_picture,
            website=account.website,
            location=account.location,
            is_private=bool(account.is_private),
            followers=account.follower_ids,
            following=account.following_ids,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class SignupRequest(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    is_private: Optional[bool] = None

    def to_draft(self) -> AccountDraft:
        return AccountDraft(
            name=self.name,
            email=self.email,
            password=self.password,
            bio=self.bio,
            profile_picture=self.profile_picture,
            website=self.website,
            location=self.location,
            is_private=self.is_private,
        )


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(BaseModel):
    account: AccountView
    token: str


class FollowResponse(CamelModel):
    message: str
    following_count: int
