"""Single-use refresh token rotation."""

from __future__ import annotations

import logging

from auth.exceptions import NotAuthorized
from auth.interfaces.credential_store import CredentialStore
from auth.models import TokenPair
from auth.services.session_issuer import SessionIssuer
from auth.services.token_generator import TokenGenerator

logger = logging.getLogger(__name__)


class RefreshRotator:
    """Exchange the live refresh token for a new session and a new refresh token.

    The stored token is replaced with a conditional update keyed on the
    presented value, so of two concurrent requests carrying the same token
    only one succeeds. The replaced token is unusable at once, and reusing it
    fails exactly like a forged token.
    """

    def __init__(self, session_issuer: SessionIssuer, token_generator: TokenGenerator) -> None:
        self._issuer = session_issuer
        self._tokens = token_generator

    async def rotate(self, store: CredentialStore, refresh_token: str) -> TokenPair:
        if not refresh_token:
            raise NotAuthorized()

        async with store.transaction() as tx:
            account = await tx.find_account_by_refresh_token(refresh_token)
            if not account:
                logger.warning("Refresh rejected: unknown or stale refresh token")
                raise NotAuthorized()

            new_refresh_token = self._tokens.generate(account.id)
            replaced = await tx.update_refresh_token(
                account.id, new_refresh_token, expected_token=refresh_token
            )
            if not replaced:
                logger.warning("Refresh rejected: token for account %s rotated concurrently", account.id)
                raise NotAuthorized()

            issued = await self._issuer.issue_refreshed(tx, account.id)

        logger.info("Rotated refresh token for account %s", account.id)
        return TokenPair(
            session=issued.session_token,
            refresh_token=new_refresh_token,
            expire_at=issued.expire_at,
        )
