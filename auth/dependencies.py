"""Auth dependency helpers."""

from __future__ import annotations

from fastapi import Depends

from auth.config import AuthConfig
from auth.interfaces.credential_store import CredentialStore
from auth.services.auth_service import AuthService
from auth.stores.memory_store import MemoryCredentialStore

_memory_store = MemoryCredentialStore()
_sqlite_store: CredentialStore | None = None
_postgres_store: CredentialStore | None = None


def get_credential_store() -> CredentialStore:
    """Get the credential store based on AUTH_STORE config."""
    global _sqlite_store, _postgres_store
    if AuthConfig.AUTH_STORE == "postgres":
        if _postgres_store is None:
            from auth.stores.postgres_store import PostgresCredentialStore

            _postgres_store = PostgresCredentialStore()
        return _postgres_store
    if AuthConfig.AUTH_STORE == "sqlite":
        if _sqlite_store is None:
            from auth.stores.sqlite_store import SQLiteCredentialStore

            _sqlite_store = SQLiteCredentialStore(AuthConfig.AUTH_DB_FILE)
        return _sqlite_store
    # Fallback to memory store for development/testing
    return _memory_store


def get_auth_service(store: CredentialStore = Depends(get_credential_store)) -> AuthService:
    return AuthService(store)
