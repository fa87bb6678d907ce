"""Username/password verification."""

from __future__ import annotations

import logging

from auth.exceptions import NotAuthorized
from auth.interfaces.credential_store import CredentialStore
from auth.security import verify_password

logger = logging.getLogger(__name__)


class CredentialVerifier:
    async def verify(self, store: CredentialStore, username: str, password: str) -> int:
        """Return the account id for valid credentials.

        Unknown usernames and wrong passwords raise the same NotAuthorized.
        """
        account = await store.find_account_by_username(username)
        if not account:
            logger.warning("Login rejected: unknown username")
            raise NotAuthorized()

        if not verify_password(password, account.salt, account.password_hash):
            logger.warning("Login rejected: bad password for account %s", account.id)
            raise NotAuthorized()

        return account.id
