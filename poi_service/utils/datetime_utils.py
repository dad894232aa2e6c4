"""Datetime helpers for API responses.
PostgreSQL TIMESTAMP columns come back naive and are stored as UTC."""
from datetime import datetime, timezone


def serialize_datetime_utc(v: datetime) -> str:
    """ISO 8601 in UTC with a trailing Z so map clients never guess the zone."""
    if v.tzinfo is not None:
        v = v.astimezone(timezone.utc).replace(tzinfo=None)
    return v.isoformat() + "Z"
