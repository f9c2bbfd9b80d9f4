"""SQLAlchemy models for accounts and the follow relationship."""
from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from social_api.domain.accounts import (
    BIO_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    LOCATION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    URL_MAX_LENGTH,
)

from .session import Base

DEFAULT_PROFILE_PICTURE = "/images/default-avatar.png"


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(32), primary_key=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    # Always stored lower-cased, so the unique index is case-insensitive.
    email = Column(String(EMAIL_MAX_LENGTH), nullable=False, unique=True, index=True)
    password_hash = Column(Text, nullable=False)
    bio = Column(String(BIO_MAX_LENGTH), nullable=False, default="")
    profile_picture = Column(String(URL_MAX_LENGTH), nullable=False, default=DEFAULT_PROFILE_PICTURE)
    website = Column(String(URL_MAX_LENGTH), nullable=True)
    location = Column(String(LOCATION_MAX_LENGTH), nullable=True)
    is_private = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    following_links = relationship(
        "Follow",
        foreign_keys="Follow.follower_id",
        viewonly=True,
        order_by="Follow.created_at",
        lazy="selectin",
    )
    follower_links = relationship(
        "Follow",
        foreign_keys="Follow.followee_id",
        viewonly=True,
        order_by="Follow.created_at",
        lazy="selectin",
    )

    @property
    def following_ids(self) -> list[str]:
        return [link.followee_id for link in self.following_links]

    @property
    def follower_ids(self) -> list[str]:
        return [link.follower_id for link in self.follower_links]


class Follow(Base):
    """One row per (follower, followee) pair; both sides of the mirror read from here."""

    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("follower_id", "followee_id", name="uq_follows_pair"),
        CheckConstraint("follower_id <> followee_id", name="ck_follows_not_self"),
        Index("ix_follows_followee", "followee_id"),
    )

    follower_id = Column(String(32), ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True)
    followee_id = Column(String(32), ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
