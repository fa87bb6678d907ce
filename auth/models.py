"""Credential and session records exchanged with the store."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Account:
    """Row of the ``login`` table."""

    id: int
    username: str
    salt: str
    password_hash: str
    refresh_token: str | None = None


@dataclass(frozen=True)
class SessionRecord:
    """Row of the ``session`` table. Valid while ``now <= expire_at``."""

    account_id: int
    session_token: str
    expire_at: int

    def is_expired(self, now: int) -> bool:
        return self.expire_at < now


@dataclass(frozen=True)
class IssuedSession:
    session_token: str
    expire_at: int


@dataclass(frozen=True)
class TokenPair:
    """Result of a successful login or refresh."""

    session: str
    refresh_token: str
    expire_at: int
