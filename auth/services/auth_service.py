"""Core auth service."""

from __future__ import annotations

import logging

from auth.exceptions import StorageFailure
from auth.interfaces.clock import Clock, system_clock
from auth.interfaces.credential_store import CredentialStore
from auth.interfaces.random_source import RandomSource
from auth.models import TokenPair
from auth.services.credential_verifier import CredentialVerifier
from auth.services.housekeeping import SessionSweeper
from auth.services.refresh_rotator import RefreshRotator
from auth.services.session_issuer import SessionIssuer
from auth.services.token_generator import TokenGenerator

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        store: CredentialStore,
        random_source: RandomSource | None = None,
        clock: Clock = system_clock,
    ) -> None:
        self._store = store
        self._tokens = TokenGenerator(random_source)
        self._verifier = CredentialVerifier()
        self._sweeper = SessionSweeper(clock)
        self._issuer = SessionIssuer(self._tokens, clock)
        self._rotator = RefreshRotator(self._issuer, self._tokens)

    async def login(self, username: str, password: str, remember: bool) -> TokenPair:
        account_id = await self._verifier.verify(self._store, username, password)

        try:
            await self._sweeper.sweep_expired(self._store, account_id)
        except StorageFailure:
            logger.warning("Expired session sweep failed for account %s", account_id, exc_info=True)

        async with self._store.transaction() as tx:
            issued = await self._issuer.issue(tx, account_id, remember)
            refresh_token = self._tokens.generate(account_id)
            await tx.update_refresh_token(account_id, refresh_token)

        logger.info("Login succeeded for account %s", account_id)
        return TokenPair(
            session=issued.session_token,
            refresh_token=refresh_token,
            expire_at=issued.expire_at,
        )

    async def refresh(self, refresh_token: str) -> TokenPair:
        return await self._rotator.rotate(self._store, refresh_token)

    async def purge_expired_sessions(self) -> int:
        return await self._sweeper.purge_expired(self._store)
