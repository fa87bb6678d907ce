"""Opaque token generation."""

from __future__ import annotations

from auth.config import AuthConfig
from auth.interfaces.random_source import OsRandomSource, RandomSource
from auth.security import hash_from_bytes


class TokenGenerator:
    """Mint unguessable tokens by hashing an identity with fresh random bytes.

    Session and refresh tokens come from the same generator; every call makes
    its own randomness draw, so two tokens minted in one request differ.
    No uniqueness check is made against stored tokens, the digest space and
    the entropy of the random source carry that guarantee.
    """

    def __init__(self, random_source: RandomSource | None = None, random_bytes: int | None = None) -> None:
        self._random = random_source or OsRandomSource()
        self._size = random_bytes or AuthConfig.TOKEN_RANDOM_BYTES

    def generate(self, identity: int | str) -> str:
        source = str(identity).encode("utf-8") + self._random.random_bytes(self._size)
        return hash_from_bytes(source)
