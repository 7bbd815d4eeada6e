from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

_TIMESTAMP_TAG = "$timestamp"


def dt_to_iso(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


def iso_to_dt(value: str | None) -> datetime | None:
    if value is None or value == "":
        return None
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def encode_timestamp(value: Any) -> Any:
    """``json.dumps`` default hook storing datetimes as tagged UTC strings."""
    if isinstance(value, datetime):
        return {_TIMESTAMP_TAG: dt_to_iso(value)}
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def decode_timestamp(obj: dict[str, Any]) -> Any:
    """``json.loads`` object hook reversing ``encode_timestamp``."""
    if len(obj) == 1 and _TIMESTAMP_TAG in obj:
        return iso_to_dt(obj[_TIMESTAMP_TAG])
    return obj
