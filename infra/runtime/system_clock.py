from __future__ import annotations

from datetime import datetime, timezone


class SystemClock:
    """Wall-clock time as an aware UTC ``datetime``."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
