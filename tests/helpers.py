"""Deterministic collaborators shared by the test modules."""

from __future__ import annotations

from auth.interfaces.credential_store import CredentialStore
from auth.models import Account
from auth.security import hash_password

NOW = 1_700_000_000


class CountingRandomSource:
    """Returns a different, predictable byte string on every draw."""

    def __init__(self) -> None:
        self.calls = 0

    def random_bytes(self, size: int) -> bytes:
        self.calls += 1
        return self.calls.to_bytes(size, "little")


class FixedClock:
    def __init__(self, now: int = NOW) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


async def seed_account(
    store: CredentialStore,
    username: str,
    password: str,
    salt: str,
    refresh_token: str | None = None,
) -> Account:
    account = await store.create_account(username, salt, hash_password(password, salt))
    if refresh_token:
        await store.update_refresh_token(account.id, refresh_token)
    return await store.find_account_by_username(username)
