"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def epoch_now() -> int:
    """Return the current unix timestamp in whole seconds."""
    return int(utc_now().timestamp())


def epoch_to_iso(ts: int) -> str:
    """Unix seconds -> ISO8601 UTC string."""
    return datetime.fromtimestamp(ts, timezone.utc).isoformat()
