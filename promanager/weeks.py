"""Date parsing and ISO week keys used for weekly quota accounting."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


def parse_date(value: Any = None) -> datetime:
    """Parse a date-like value into a ``datetime``.

    ``None`` means now (UTC). Plain dates become midnight of that day.
    Raises ``ValueError`` for anything that cannot be read as ISO-8601.
    """
    if value is None:
        return datetime.now(timezone.utc)
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("empty date string")
        if text.lower() == "now":
            return datetime.now(timezone.utc)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    raise ValueError(f"unsupported date value: {value!r}")


def week_key_of(value: Any = None) -> int:
    """Return ``iso_year * 100 + iso_week`` for a date-like value.

    The ISO week-numbering year is used, so 2024-12-31 maps to 202501.
    Unparseable input is logged and yields 0.
    """
    try:
        parsed = parse_date(value)
    except (TypeError, ValueError) as exc:
        logger.error("week_key_of: invalid date %r: %s", value, exc)
        return 0
    iso_year, iso_week, _ = parsed.isocalendar()
    return iso_year * 100 + iso_week


def day_bounds(value: Any) -> tuple[datetime, datetime]:
    """Return the first and last instant of the calendar day of ``value``."""
    parsed = parse_date(value)
    start = datetime(parsed.year, parsed.month, parsed.day)
    end = start.replace(hour=23, minute=59, second=59, microsecond=999999)
    return start, end
