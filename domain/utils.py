from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_display_date(instant: datetime, tz: tzinfo = timezone.utc) -> str:
    """Render an instant as a short date such as ``"Jun 15, 2025"``."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    local = instant.astimezone(tz)
    return f"{_MONTHS[local.month - 1]} {local.day}, {local.year}"


def parse_display_date(value: str) -> date | None:
    """Inverse of ``format_display_date``; returns ``None`` when unparsable."""
    try:
        month_part, day_part, year_part = value.replace(",", " ").split()
        month = _MONTHS.index(month_part[:3].title()) + 1
        return date(int(year_part), month, int(day_part))
    except ValueError:
        return None


def start_of_day(day: date, tz: tzinfo = timezone.utc) -> datetime:
    """Midnight of ``day`` in ``tz``, as an aware UTC instant."""
    return datetime.combine(day, time.min, tzinfo=tz).astimezone(timezone.utc)
