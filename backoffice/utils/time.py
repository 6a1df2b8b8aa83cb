"""Time utilities (UTC now, epoch millis)."""
from __future__ import annotations
from datetime import datetime, timezone

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

def epoch_millis(moment: datetime | None = None) -> int:
    ts = moment or utc_now()
    return int(ts.timestamp() * 1000)

__all__ = ["utc_now", "epoch_millis"]
