"""Account provisioning."""

from __future__ import annotations

from dataclasses import replace

from auth.config import AuthConfig
from auth.interfaces.credential_store import CredentialStore
from auth.interfaces.random_source import OsRandomSource, RandomSource
from auth.models import Account
from auth.security import hash_password
from auth.services.token_generator import TokenGenerator


async def provision_account(
    store: CredentialStore,
    username: str,
    password: str,
    random_source: RandomSource | None = None,
) -> Account:
    """Create an account with a fresh salt and an initial refresh token.

    Raises:
        AccountExists: If the username is taken.
    """
    random_source = random_source or OsRandomSource()
    salt = random_source.random_bytes(AuthConfig.SALT_BYTES).hex()
    tokens = TokenGenerator(random_source)

    async with store.transaction() as tx:
        account = await tx.create_account(username, salt, hash_password(password, salt))
        refresh_token = tokens.generate(account.id)
        await tx.update_refresh_token(account.id, refresh_token)

    return replace(account, refresh_token=refresh_token)
