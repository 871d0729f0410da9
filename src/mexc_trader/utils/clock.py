"""Wall-clock helpers."""

from __future__ import annotations

import time


def utc_millis() -> int:
    """Current epoch time in milliseconds."""
    return int(time.time() * 1000)
