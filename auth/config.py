"""Auth configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env file before reading config
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path, override=True)
else:
    load_dotenv(override=True)


@dataclass(frozen=True)
class AuthConfig:
    """Configuration values for login and refresh flows."""

    SESSION_REMEMBER_EXPIRE_HOURS: int = int(os.getenv("SESSION_REMEMBER_EXPIRE_HOURS", str(24 * 7)))
    SESSION_NO_REMEMBER_EXPIRE_MINUTES: int = int(
        os.getenv("SESSION_NO_REMEMBER_EXPIRE_MINUTES", "30")
    )
    REFRESHED_SESSION_EXPIRE_HOURS: int = int(os.getenv("REFRESHED_SESSION_EXPIRE_HOURS", str(24 * 7)))

    TOKEN_RANDOM_BYTES: int = int(os.getenv("TOKEN_RANDOM_BYTES", "8"))
    SALT_BYTES: int = int(os.getenv("SALT_BYTES", "16"))
    HASH_ALGORITHM: str = os.getenv("AUTH_HASH_ALGORITHM", "sha256")

    # Interval of the background purge of expired sessions; 0 disables it
    SESSION_PURGE_INTERVAL_SECONDS: int = int(os.getenv("SESSION_PURGE_INTERVAL_SECONDS", "3600"))

    # Auth store: "postgres" (production), "sqlite" (single node) or "memory" (testing)
    AUTH_STORE: str = os.getenv("AUTH_STORE", "postgres")
    AUTH_DB_FILE: str = os.getenv("AUTH_DB_FILE", "auth.db")
