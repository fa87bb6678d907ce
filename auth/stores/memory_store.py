"""In-memory credential store."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import AsyncIterator

from auth.exceptions import AccountExists
from auth.models import Account, SessionRecord


class _MemoryState:
    def __init__(self) -> None:
        self.accounts: dict[int, Account] = {}
        self.sessions: dict[str, SessionRecord] = {}
        self.next_id = 1

    def snapshot(self) -> tuple[dict[int, Account], dict[str, SessionRecord], int]:
        # records are frozen, shallow copies are enough
        return dict(self.accounts), dict(self.sessions), self.next_id

    def restore(self, snapshot: tuple[dict[int, Account], dict[str, SessionRecord], int]) -> None:
        self.accounts, self.sessions, self.next_id = snapshot


class MemoryTransaction:
    """Store operations run while the owning store's lock is held."""

    def __init__(self, state: _MemoryState) -> None:
        self._state = state

    async def find_account_by_username(self, username: str) -> Account | None:
        for account in self._state.accounts.values():
            if account.username == username:
                return account
        return None

    async def find_account_by_refresh_token(self, refresh_token: str) -> Account | None:
        if not refresh_token:
            return None
        for account in self._state.accounts.values():
            if account.refresh_token == refresh_token:
                return account
        return None

    async def find_sessions(self, account_id: int) -> list[SessionRecord]:
        return [s for s in self._state.sessions.values() if s.account_id == account_id]

    async def delete_session(self, session_token: str) -> None:
        self._state.sessions.pop(session_token, None)

    async def insert_session(self, account_id: int, session_token: str, expire_at: int) -> None:
        self._state.sessions[session_token] = SessionRecord(
            account_id=account_id,
            session_token=session_token,
            expire_at=expire_at,
        )

    async def update_refresh_token(
        self,
        account_id: int,
        new_token: str,
        expected_token: str | None = None,
    ) -> bool:
        account = self._state.accounts.get(account_id)
        if not account:
            return False
        if expected_token is not None and account.refresh_token != expected_token:
            return False
        self._state.accounts[account_id] = replace(account, refresh_token=new_token)
        return True

    async def delete_expired_sessions(self, now: int) -> int:
        expired = [token for token, s in self._state.sessions.items() if s.is_expired(now)]
        for token in expired:
            del self._state.sessions[token]
        return len(expired)

    async def create_account(self, username: str, salt: str, password_hash: str) -> Account:
        if await self.find_account_by_username(username):
            raise AccountExists(username)
        account = Account(
            id=self._state.next_id,
            username=username,
            salt=salt,
            password_hash=password_hash,
        )
        self._state.next_id += 1
        self._state.accounts[account.id] = account
        return account

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[MemoryTransaction]:
        yield self


class MemoryCredentialStore:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._state = _MemoryState()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[MemoryTransaction]:
        async with self._lock:
            snapshot = self._state.snapshot()
            try:
                yield MemoryTransaction(self._state)
            except BaseException:
                self._state.restore(snapshot)
                raise

    async def find_account_by_username(self, username: str) -> Account | None:
        async with self.transaction() as tx:
            return await tx.find_account_by_username(username)

    async def find_account_by_refresh_token(self, refresh_token: str) -> Account | None:
        async with self.transaction() as tx:
            return await tx.find_account_by_refresh_token(refresh_token)

    async def find_sessions(self, account_id: int) -> list[SessionRecord]:
        async with self.transaction() as tx:
            return await tx.find_sessions(account_id)

    async def delete_session(self, session_token: str) -> None:
        async with self.transaction() as tx:
            await tx.delete_session(session_token)

    async def insert_session(self, account_id: int, session_token: str, expire_at: int) -> None:
        async with self.transaction() as tx:
            await tx.insert_session(account_id, session_token, expire_at)

    async def update_refresh_token(
        self,
        account_id: int,
        new_token: str,
        expected_token: str | None = None,
    ) -> bool:
        async with self.transaction() as tx:
            return await tx.update_refresh_token(account_id, new_token, expected_token)

    async def delete_expired_sessions(self, now: int) -> int:
        async with self.transaction() as tx:
            return await tx.delete_expired_sessions(now)

    async def create_account(self, username: str, salt: str, password_hash: str) -> Account:
        async with self.transaction() as tx:
            return await tx.create_account(username, salt, password_hash)
