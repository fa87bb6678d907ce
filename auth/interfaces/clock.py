"""Clock interface returning epoch seconds."""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def system_clock() -> int:
    return int(time.time())
