"""Security utilities for auth."""

from __future__ import annotations

import hashlib
import hmac

from auth.config import AuthConfig


def hash_from_bytes(data: bytes) -> str:
    """Hash raw bytes to a fixed-length lowercase hex digest."""
    return hashlib.new(AuthConfig.HASH_ALGORITHM, data).hexdigest()


def hash_from_string(value: str) -> str:
    return hash_from_bytes(value.encode("utf-8"))


def hash_password(password: str, salt: str) -> str:
    """Hash a password salted with the account's salt."""
    return hash_from_string(f"{password}{salt}")


def verify_password(password: str, salt: str, password_hash: str) -> bool:
    """Verify a password against the stored salted hash."""
    candidate = hash_password(password, salt).encode("utf-8")
    return hmac.compare_digest(candidate, password_hash.encode("utf-8"))
