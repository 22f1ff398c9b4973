"""Time helpers shared by persistence and the round controller."""

from __future__ import annotations

from datetime import datetime, timezone
import time


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def epoch_millis() -> int:
    """Milliseconds since the epoch, the unit used for the sync markers."""
    return int(time.time() * 1000)
