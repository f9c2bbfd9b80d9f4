"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from social_api.db.models import Account, Follow
from social_api.db.session import get_session


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    def _fetch(self, session: Session, account_id: str) -> Optional[Account]:
        # populate_existing reloads rows expired by a previous commit, links included.
        stmt = (
            select(Account)
            .where(Account.id == account_id)
            .execution_options(populate_existing=True)
        )
        return session.execute(stmt).scalar_one_or_none()

    # -------------------------- accounts --------------------------
    def get_account(self, account_id: str) -> Optional[Account]:
        if not account_id:
            return None
        with get_session() as session:
            return self._fetch(session, account_id)

    def get_account_by_email(self, email: str) -> Optional[Account]:
        with get_session() as session:
            stmt = select(Account).where(Account.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def account_exists(self, account_id: str) -> bool:
        with get_session() as session:
            stmt = select(Account.id).where(Account.id == account_id).limit(1)
            return session.execute(stmt).first() is not None

    def list_accounts(self) -> list[Account]:
        with get_session() as session:
            stmt = select(Account).order_by(Account.created_at.desc(), Account.id)
            return list(session.execute(stmt).scalars().all())

    def create_account(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        bio: str = "",
        profile_picture: str,
        website: str | None = None,
        location: str | None = None,
        is_private: bool = False,
    ) -> Account:
        """Insert a new account. IntegrityError propagates when the email is taken."""
        now = datetime.now(timezone.utc)
        entity = Account(
            id=uuid.uuid4().hex,
            name=name,
            email=email,
            password_hash=password_hash,
            bio=bio,
            profile_picture=profile_picture,
            website=website,
            location=location,
            is_private=is_private,
            created_at=now,
            updated_at=now,
        )
        with get_session() as session:
            session.add(entity)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                raise
            return self._fetch(session, entity.id)

    def update_account(self, account_id: str, values: dict[str, Any]) -> Optional[Account]:
        with get_session() as session:
            stmt = (
                update(Account)
                .where(Account.id == account_id)
                .values(**values, updated_at=datetime.now(timezone.utc))
            )
            result = session.execute(stmt)
            if not result.rowcount:
                session.rollback()
                return None
            session.commit()
            return self._fetch(session, account_id)

    def delete_account(self, account_id: str) -> bool:
        """Delete the account and every follow row that mentions it, atomically."""
        with get_session() as session:
            session.execute(
                delete(Follow).where(
                    or_(Follow.follower_id == account_id, Follow.followee_id == account_id)
                )
            )
            result = session.execute(delete(Account).where(Account.id == account_id))
            if not result.rowcount:
                session.rollback()
                return False
            session.commit()
            return True

    # -------------------------- follows --------------------------
    def add_follow(self, follower_id: str, followee_id: str) -> bool:
        """Create the relationship; returns False if it already existed."""
        now = datetime.now(timezone.utc)
        with get_session() as session:
            if session.get(Follow, (follower_id, followee_id)) is not None:
                return False
            try:
                session.add(Follow(follower_id=follower_id, followee_id=followee_id, created_at=now))
                session.flush()
                session.execute(
                    update(Account)
                    .where(Account.id.in_([follower_id, followee_id]))
                    .values(updated_at=now)
                )
                session.commit()
            except IntegrityError:
                # Lost a race with an identical insert, or an account is gone.
                session.rollback()
                return False
            return True

    def remove_follow(self, follower_id: str, followee_id: str) -> bool:
        now = datetime.now(timezone.utc)
        with get_session() as session:
            result = session.execute(
                delete(Follow).where(
                    Follow.follower_id == follower_id,
                    Follow.followee_id == followee_id,
                )
            )
            if not result.rowcount:
                session.rollback()
                return False
            session.execute(
                update(Account)
                .where(Account.id.in_([follower_id, followee_id]))
                .values(updated_at=now)
            )
            session.commit()
            return True

    def is_following(self, follower_id: str, followee_id: str) -> bool:
        with get_session() as session:
            return session.get(Follow, (follower_id, followee_id)) is not None

    def count_following(self, account_id: str) -> int:
        with get_session() as session:
            stmt = select(func.count()).select_from(Follow).where(Follow.follower_id == account_id)
            return int(session.execute(stmt).scalar_one())

    def list_following_ids(self, account_id: str) -> list[str]:
        with get_session() as session:
            stmt = (
                select(Follow.followee_id)
                .where(Follow.follower_id == account_id)
                .order_by(Follow.created_at)
            )
            return list(session.execute(stmt).scalars().all())

    def list_follower_ids(self, account_id: str) -> list[str]:
        with get_session() as session:
            stmt = (
                select(Follow.follower_id)
                .where(Follow.followee_id == account_id)
                .order_by(Follow.created_at)
            )
            return list(session.execute(stmt).scalars().all())
