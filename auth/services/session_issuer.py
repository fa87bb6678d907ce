"""Session creation with policy-driven expiry."""

from __future__ import annotations

from datetime import timedelta

from auth.config import AuthConfig
from auth.interfaces.clock import Clock, system_clock
from auth.interfaces.credential_store import CredentialStore
from auth.models import IssuedSession
from auth.services.token_generator import TokenGenerator

REMEMBER_DURATION = timedelta(hours=AuthConfig.SESSION_REMEMBER_EXPIRE_HOURS)
NO_REMEMBER_DURATION = timedelta(minutes=AuthConfig.SESSION_NO_REMEMBER_EXPIRE_MINUTES)
REFRESHED_DURATION = timedelta(hours=AuthConfig.REFRESHED_SESSION_EXPIRE_HOURS)


class SessionIssuer:
    def __init__(self, token_generator: TokenGenerator, clock: Clock = system_clock) -> None:
        self._tokens = token_generator
        self._clock = clock

    @staticmethod
    def policy_duration(remember: bool) -> timedelta:
        return REMEMBER_DURATION if remember else NO_REMEMBER_DURATION

    async def issue(self, store: CredentialStore, account_id: int, remember: bool) -> IssuedSession:
        return await self._issue(store, account_id, self.policy_duration(remember))

    async def issue_refreshed(self, store: CredentialStore, account_id: int) -> IssuedSession:
        # refresh requests carry no remember flag
        return await self._issue(store, account_id, REFRESHED_DURATION)

    async def _issue(self, store: CredentialStore, account_id: int, duration: timedelta) -> IssuedSession:
        expire_at = self._clock() + int(duration.total_seconds())
        session_token = self._tokens.generate(account_id)
        await store.insert_session(account_id, session_token, expire_at)
        return IssuedSession(session_token=session_token, expire_at=expire_at)
