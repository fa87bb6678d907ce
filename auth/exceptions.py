"""Auth exceptions."""

from __future__ import annotations

from enum import Enum


class AuthErrorKind(str, Enum):
    NOT_AUTHORIZED = "not_authorized"
    STORAGE_FAILURE = "storage_failure"
    ACCOUNT_EXISTS = "account_exists"


class AuthException(Exception):
    """Base auth exception with HTTP status and error kind."""

    kind: AuthErrorKind | None = None

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotAuthorized(AuthException):
    """Bad credentials or an unusable refresh token.

    Every cause shares one message so callers cannot tell an unknown
    username from a wrong password.
    """

    kind = AuthErrorKind.NOT_AUTHORIZED

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, status_code=401)


class StorageFailure(AuthException):
    """The credential store could not complete an operation."""

    kind = AuthErrorKind.STORAGE_FAILURE

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message, status_code=500)


class AccountExists(AuthException):
    kind = AuthErrorKind.ACCOUNT_EXISTS

    def __init__(self, username: str):
        super().__init__(f"Account {username!r} already exists", status_code=409)
        self.username = username
