"""Centralised clock helpers — single source of truth for 'now'.

The dedup guard compares elapsed time with ``monotonic()`` so wall-clock
jumps never unblock or block a message; inbound messages are stamped with
``now_utc()``. Tests patch or inject these instead of sleeping.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return the current UTC datetime (timezone-aware)."""
    return datetime.now(timezone.utc)


def monotonic() -> float:
    """Seconds from an arbitrary fixed point; only differences are meaningful."""
    return time.monotonic()
