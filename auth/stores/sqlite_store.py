"""SQLite credential store."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import asynccontextmanager, contextmanager
from typing import AsyncIterator

from auth.exceptions import AccountExists, StorageFailure
from auth.models import Account, SessionRecord


def _row_to_account(row: sqlite3.Row) -> Account:
    return Account(
        id=row["id"],
        username=row["username"],
        salt=row["salt"],
        password_hash=row["password_hash"],
        refresh_token=row["refresh_token"],
    )


class SQLiteTransaction:
    """Store operations bound to one open connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def find_account_by_username(self, username: str) -> Account | None:
        row = self._conn.execute(
            "SELECT * FROM login WHERE username = ?",
            (username,),
        ).fetchone()
        return _row_to_account(row) if row else None

    async def find_account_by_refresh_token(self, refresh_token: str) -> Account | None:
        if not refresh_token:
            return None
        row = self._conn.execute(
            "SELECT * FROM login WHERE refresh_token = ?",
            (refresh_token,),
        ).fetchone()
        return _row_to_account(row) if row else None

    async def find_sessions(self, account_id: int) -> list[SessionRecord]:
        rows = self._conn.execute(
            "SELECT account_id, session_token, expire_at FROM session WHERE account_id = ?",
            (account_id,),
        ).fetchall()
        return [
            SessionRecord(
                account_id=row["account_id"],
                session_token=row["session_token"],
                expire_at=row["expire_at"],
            )
            for row in rows
        ]

    async def delete_session(self, session_token: str) -> None:
        self._conn.execute("DELETE FROM session WHERE session_token = ?", (session_token,))

    async def insert_session(self, account_id: int, session_token: str, expire_at: int) -> None:
        self._conn.execute(
            "INSERT INTO session (account_id, session_token, expire_at) VALUES (?, ?, ?)",
            (account_id, session_token, expire_at),
        )

    async def update_refresh_token(
        self,
        account_id: int,
        new_token: str,
        expected_token: str | None = None,
    ) -> bool:
        if expected_token is None:
            cursor = self._conn.execute(
                "UPDATE login SET refresh_token = ? WHERE id = ?",
                (new_token, account_id),
            )
        else:
            cursor = self._conn.execute(
                "UPDATE login SET refresh_token = ? WHERE id = ? AND refresh_token = ?",
                (new_token, account_id, expected_token),
            )
        return cursor.rowcount > 0

    async def delete_expired_sessions(self, now: int) -> int:
        cursor = self._conn.execute("DELETE FROM session WHERE expire_at < ?", (now,))
        return cursor.rowcount

    async def create_account(self, username: str, salt: str, password_hash: str) -> Account:
        try:
            cursor = self._conn.execute(
                "INSERT INTO login (username, salt, password_hash) VALUES (?, ?, ?)",
                (username, salt, password_hash),
            )
        except sqlite3.IntegrityError as exc:
            raise AccountExists(username) from exc
        return Account(
            id=cursor.lastrowid,
            username=username,
            salt=salt,
            password_hash=password_hash,
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[SQLiteTransaction]:
        yield self


class SQLiteCredentialStore:
    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._ensure_schema()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            connection = sqlite3.connect(self._db_path, check_same_thread=False)
            connection.row_factory = sqlite3.Row
            try:
                with connection:
                    yield connection
            finally:
                connection.close()
        except sqlite3.Error as exc:
            raise StorageFailure(f"SQLite error: {exc}") from exc

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS login (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    username TEXT UNIQUE NOT NULL,
                    salt TEXT NOT NULL,
                    password_hash TEXT NOT NULL,
                    refresh_token TEXT UNIQUE
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS session (
                    session_token TEXT PRIMARY KEY,
                    account_id INTEGER NOT NULL REFERENCES login (id) ON DELETE CASCADE,
                    expire_at INTEGER NOT NULL
                )
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS ix_session_account_id ON session (account_id)"
            )

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[SQLiteTransaction]:
        with self._connect() as conn:
            yield SQLiteTransaction(conn)

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
