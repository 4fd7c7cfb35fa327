"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Optional, Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_datetime(value: Union[str, date, datetime]) -> datetime:
    """Parse a date string into a naive datetime.

    Supports the formats understood by dateutil (ISO 8601, "01/15/24",
    "January 15, 2024", ...) plus the relative words "today", "yesterday"
    and "now". Timezone-aware inputs are converted to local time and made
    naive, the same clock as ``datetime.now()`` and ``month_bounds``.

    Args:
        value: Date string, date or datetime

    Returns:
        Naive datetime

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return _naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    text = str(value).strip()
    lowered = text.lower()
    if lowered == "now":
        return datetime.now()
    if lowered == "today":
        return datetime.combine(date.today(), datetime.min.time())
    if lowered == "yesterday":
        return datetime.combine(date.today() - timedelta(days=1), datetime.min.time())

    try:
        return _naive(date_parser.parse(text))
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{text}': {e}")


def parse_datetime_or_now(value: Optional[str]) -> datetime:
    """Parse a date string, substituting the current instant when it is absent or invalid."""
    if not value:
        return datetime.now()
    try:
        return parse_datetime(value)
    except ValueError:
        return datetime.now()


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """Get the first and last instant of a calendar month.

    The end is 23:59:59 on the last day of the month. Months outside 1..12
    roll over into neighbouring years instead of raising, so month 13 of
    2024 is January 2025 and month 0 is December of the previous year.

    Args:
        year: Calendar year
        month: Month number, nominally 1..12

    Returns:
        Tuple of (start_of_month, end_of_month)
    """
    start = datetime(year, 1, 1) + relativedelta(months=month - 1)
    last_day = start + relativedelta(months=1) - timedelta(days=1)
    end = last_day.replace(hour=23, minute=59, second=59)
    return (start, end)


def current_month() -> tuple[int, int]:
    """Return (month, year) of the local current date."""
    today = date.today()
    return (today.month, today.year)


def _naive(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)
