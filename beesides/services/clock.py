"""Timestamps written by domain operations (ISO-8601, UTC)."""

from datetime import datetime, timezone


def timestamp(now: datetime | None = None) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()
