"""Account CRUD and follow endpoints.

List and show are public; profile, update, delete, follow and unfollow
require a bearer token.
"""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from social_api.core.errors import ValidationError
from social_api.db.models import Account
from social_api.routers.deps import current_account, get_guard
from social_api.schemas.accounts import AccountView, FollowResponse
from social_api.services.access_guard import AccessGuard
from social_api.services.account_service import AccountService
from social_api.services.social_graph_service import SocialGraphService

router = APIRouter(prefix="/api/accounts", tags=["accounts"])
account_service = AccountService()
graph_service = SocialGraphService()


@router.get("", response_model=list[AccountView])
def list_accounts():
    return [AccountView.from_entity(a) for a in account_service.list_all()]


# Declared before /{account_id} so "profile" is not read as an id.
@router.get("/profile", response_model=AccountView)
def get_profile(account: Account = Depends(current_account)):
    return AccountView.from_entity(account)


@router.get("/{account_id}", response_model=AccountView)
def show_account(account_id: str):
    return AccountView.from_entity(account_service.find_by_id(account_id))


@router.put("/{account_id}", response_model=AccountView)
def update_account(
    account_id: str,
    payload: Any = Body(default=None),
    account: Account = Depends(current_account),
    guard: AccessGuard = Depends(get_guard),
):
    guard.authorize_owner(account, account_id)
    if not isinstance(payload, dict):
        raise ValidationError("Update payload must be an object")
    return AccountView.from_entity(account_service.update(account_id, payload))


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    account_id: str,
    account: Account = Depends(current_account),
    guard: AccessGuard = Depends(get_guard),
):
    guard.authorize_owner(account, account_id)
    account_service.delete(account_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{account_id}/follow", response_model=FollowResponse)
def follow_account(account_id: str, account: Account = Depends(current_account)):
    result = graph_service.follow(account, account_id)
    message = "Now following account" if result.changed else "Already following account"
    return FollowResponse(message=message, following_count=result.following_count)


@router.post("/{account_id}/unfollow", response_model=FollowResponse)
def unfollow_account(account_id: str, account: Account = Depends(current_account)):
    result = graph_service.unfollow(account, account_id)
    message = "Unfollowed account" if result.changed else "Not following account"
    return FollowResponse(message=message, following_count=result.following_count)
