"""Calendar days: canonical keys and local "today"."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DAY_KEY_FORMAT = "%Y-%m-%d"


def day_key(day: date) -> str:
    """Canonical `YYYY-MM-DD` encoding of a calendar day."""
    return day.isoformat()


def parse_day_key(value: str) -> date:
    """Decode a `YYYY-MM-DD` key. Raises ValueError on anything else."""
    if len(value) != 10:
        raise ValueError(f"Invalid day key: {value!r}")
    return datetime.strptime(value, DAY_KEY_FORMAT).date()


def shift_day(day: date, offset: int) -> date:
    return day + timedelta(days=offset)


def local_today(tz_name: str, now: datetime | None = None) -> date:
    """Local calendar day in `tz_name`. Unknown zones fall back to UTC."""
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        # Directory names such as "America" surface as IsADirectoryError
        logger.warning("Unknown timezone %r, using UTC", tz_name)
        tz = timezone.utc
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    return current.astimezone(tz).date()
