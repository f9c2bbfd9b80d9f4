"""
Follow/unfollow use cases.

Relationships live in a single `follows` table keyed by (follower, followee),
so an account's `following` and the target's `followers` are two reads of the
same row and can never disagree.
"""

from __future__ import annotations

from dataclasses import dataclass

from social_api.core.errors import NotFoundError, SelfFollowRejectedError, SelfUnfollowRejectedError
from social_api.core.logging import get_logger
from social_api.db.models import Account
from social_api.repositories.sql_repository import SQLRepository

logger = get_logger(__name__)


@dataclass
class FollowResult:
    following_count: int
    changed: bool


@dataclass
class SocialGraphService:
    def __post_init__(self):
        self.repository = SQLRepository()

    def _require_target(self, target_id: str) -> None:
        if not target_id or not self.repository.account_exists(target_id):
            raise NotFoundError()

    def follow(self, actor: Account, target_id: str) -> FollowResult:
        if actor.id == target_id:
            raise SelfFollowRejectedError()
        self._require_target(target_id)
        changed = self.repository.add_follow(actor.id, target_id)
        if not changed:
            # The insert also fails when the target vanished after the check.
            self._require_target(target_id)
        else:
            logger.info("Account %s followed %s", actor.id, target_id)
        return FollowResult(following_count=self.repository.count_following(actor.id), changed=changed)

    def unfollow(self, actor: Account, target_id: str) -> FollowResult:
        if actor.id == target_id:
            raise SelfUnfollowRejectedError()
        self._require_target(target_id)
        changed = self.repository.remove_follow(actor.id, target_id)
        if changed:
            logger.info("Account %s unfollowed %s", actor.id, target_id)
        return FollowResult(following_count=self.repository.count_following(actor.id), changed=changed)

    def is_following(self, actor_id: str, target_id: str) -> bool:
        return self.repository.is_following(actor_id, target_id)

    def followers_of(self, account_id: str) -> list[str]:
        self._require_target(account_id)
        return self.repository.list_follower_ids(account_id)

    def following_of(self, account_id: str) -> list[str]:
        self._require_target(account_id)
        return self.repository.list_following_ids(account_id)
