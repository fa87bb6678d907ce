"""Random bytes provider interface."""

from __future__ import annotations

import secrets
from typing import Protocol


class RandomSource(Protocol):
    def random_bytes(self, size: int) -> bytes:
        ...


class OsRandomSource:
    """Cryptographically secure bytes from the operating system."""

    def random_bytes(self, size: int) -> bytes:
        return secrets.token_bytes(size)
