"""Auth request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel


class ApiResponse(BaseModel):
    success: bool
    message: str
    data: dict | None = None


# Credential fields are not length-checked here: any bad value is a
# NotAuthorized decided by the auth services.
class LoginRequest(BaseModel):
    username: str
    pw: str
    remember: bool = False


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenResponse(BaseModel):
    session: str
    refresh_token: str
