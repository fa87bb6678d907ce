"""PostgreSQL credential store using SQLAlchemy."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from auth.exceptions import AccountExists, StorageFailure
from auth.models import Account, SessionRecord
from db.engine import get_session_factory
from db.models.auth import AuthAccount, AuthSession


def _to_account(row: AuthAccount) -> Account:
    return Account(
        id=row.id,
        username=row.username,
        salt=row.salt,
        password_hash=row.password_hash,
        refresh_token=row.refresh_token,
    )


class PostgresTransaction:
    """Store operations bound to one SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self._db = db

    async def find_account_by_username(self, username: str) -> Account | None:
        account = self._db.execute(
            select(AuthAccount).where(AuthAccount.username == username)
        ).scalar_one_or_none()
        return _to_account(account) if account else None

    async def find_account_by_refresh_token(self, refresh_token: str) -> Account | None:
        if not refresh_token:
            return None
        account = self._db.execute(
            select(AuthAccount).where(AuthAccount.refresh_token == refresh_token)
        ).scalar_one_or_none()
        return _to_account(account) if account else None

    async def find_sessions(self, account_id: int) -> list[SessionRecord]:
        sessions = self._db.execute(
            select(AuthSession).where(AuthSession.account_id == account_id)
        ).scalars()
        return [
            SessionRecord(
                account_id=session.account_id,
                session_token=session.session_token,
                expire_at=session.expire_at,
            )
            for session in sessions
        ]

    async def delete_session(self, session_token: str) -> None:
        self._db.execute(delete(AuthSession).where(AuthSession.session_token == session_token))

    async def insert_session(self, account_id: int, session_token: str, expire_at: int) -> None:
        self._db.add(
            AuthSession(
                account_id=account_id,
                session_token=session_token,
                expire_at=expire_at,
            )
        )
        self._db.flush()

    async def update_refresh_token(
        self,
        account_id: int,
        new_token: str,
        expected_token: str | None = None,
    ) -> bool:
        statement = update(AuthAccount).where(AuthAccount.id == account_id)
        if expected_token is not None:
            statement = statement.where(AuthAccount.refresh_token == expected_token)
        result = self._db.execute(
            statement.values(refresh_token=new_token).execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def delete_expired_sessions(self, now: int) -> int:
        result = self._db.execute(delete(AuthSession).where(AuthSession.expire_at < now))
        return result.rowcount

    async def create_account(self, username: str, salt: str, password_hash: str) -> Account:
        if await self.find_account_by_username(username):
            raise AccountExists(username)
        account = AuthAccount(username=username, salt=salt, password_hash=password_hash)
        self._db.add(account)
        try:
            self._db.flush()
        except IntegrityError as exc:
            raise AccountExists(username) from exc
        return _to_account(account)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[PostgresTransaction]:
        yield self


class PostgresCredentialStore:
    """Credential store backed by PostgreSQL."""

    def __init__(self, session_factory: Callable[[], Session] | None = None) -> None:
        self._session_factory = session_factory or get_session_factory()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[PostgresTransaction]:
        try:
            with self._session_factory() as db:
                with db.begin():
                    yield PostgresTransaction(db)
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Database error: {exc}") from exc

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
