"""Hotel API helper functions."""

from datetime import date, datetime, timedelta
from typing import List, Optional, Union


def parse_day(value: Union[str, date, None]) -> Optional[date]:
    """Parse an ISO date or datetime string into a calendar day.

    "2024-01-01" and "2024-01-01T15:00:00" both give date(2024, 1, 1).
    Returns None for empty or unparseable input.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def expand_date_range(start: date, end: date) -> List[str]:
    """Expand the inclusive range [start, end] into ISO calendar days.

    The result is strictly increasing, has (end - start).days + 1 items and
    includes both endpoints. An end before the start gives an empty list.
    """
    days = []
    current = start
    while current <= end:
        days.append(current.isoformat())
        current += timedelta(days=1)
    return days
