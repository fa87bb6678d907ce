"""Credential store interface for accounts and sessions."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from auth.models import Account, SessionRecord


class CredentialStore(Protocol):
    async def find_account_by_username(self, username: str) -> Account | None:
        ...

    async def find_account_by_refresh_token(self, refresh_token: str) -> Account | None:
        ...

    async def find_sessions(self, account_id: int) -> list[SessionRecord]:
        ...

    async def delete_session(self, session_token: str) -> None:
        ...

    async def insert_session(self, account_id: int, session_token: str, expire_at: int) -> None:
        ...

    async def update_refresh_token(
        self,
        account_id: int,
        new_token: str,
        expected_token: str | None = None,
    ) -> bool:
        """Overwrite the account's refresh token.

        With ``expected_token`` the write only happens while the stored value
        still equals it. Returns whether a row was changed.
        """
        ...

    async def delete_expired_sessions(self, now: int) -> int:
        ...

    async def create_account(self, username: str, salt: str, password_hash: str) -> Account:
        ...

    def transaction(self) -> AbstractAsyncContextManager[CredentialStore]:
        """Group writes so they commit together or not at all."""
        ...
