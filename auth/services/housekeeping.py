"""Removal of expired session rows."""

from __future__ import annotations

import logging

from auth.interfaces.clock import Clock, system_clock
from auth.interfaces.credential_store import CredentialStore

logger = logging.getLogger(__name__)


class SessionSweeper:
    """Bounds the growth of the session table.

    Expired rows are inert even before deletion, so sweeping is cleanup and
    never a precondition for security.
    """

    def __init__(self, clock: Clock = system_clock) -> None:
        self._clock = clock

    async def sweep_expired(self, store: CredentialStore, account_id: int) -> int:
        now = self._clock()
        removed = 0
        for session in await store.find_sessions(account_id):
            if session.is_expired(now):
                await store.delete_session(session.session_token)
                removed += 1
        if removed:
            logger.debug("Removed %d expired sessions for account %s", removed, account_id)
        return removed

    async def purge_expired(self, store: CredentialStore) -> int:
        removed = await store.delete_expired_sessions(self._clock())
        if removed:
            logger.info("Purged %d expired sessions", removed)
        return removed
