"""Auth API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth.dependencies import get_auth_service
from auth.schemas import LoginRequest, RefreshRequest, TokenResponse
from auth.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=TokenResponse, status_code=status.HTTP_200_OK)
async def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    tokens = await auth_service.login(payload.username, payload.pw, payload.remember)
    return TokenResponse(session=tokens.session, refresh_token=tokens.refresh_token)


@router.post("/refresh", response_model=TokenResponse, status_code=status.HTTP_200_OK)
async def refresh(
    payload: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    tokens = await auth_service.refresh(payload.refresh_token)
    return TokenResponse(session=tokens.session, refresh_token=tokens.refresh_token)
