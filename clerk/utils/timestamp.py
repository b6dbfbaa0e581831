"""Timestamp utilities."""

from datetime import datetime, timezone


def now_exact() -> str:
    """Current UTC time as an ISO 8601 string (e.g., "2025-11-13T18:45:40.572549+00:00")."""
    return datetime.now(timezone.utc).isoformat()


def now_epoch_ms() -> int:
    """Current time in milliseconds since the Unix epoch."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)
