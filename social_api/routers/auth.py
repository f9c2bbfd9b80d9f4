from __future__ import annotations

from fastapi import APIRouter, status

from social_api.schemas.accounts import AccountView, AuthResponse, LoginRequest, SignupRequest
from social_api.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])
auth_service = AuthService()


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest):
    result = auth_service.signup(payload.to_draft())
    return AuthResponse(account=AccountView.from_entity(result.account), token=result.token)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest):
    result = auth_service.login(payload.email, payload.password)
    return AuthResponse(account=AccountView.from_entity(result.account), token=result.token)
