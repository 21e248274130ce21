"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser

# The school year opens in September
SCHOOL_YEAR_START_MONTH = 9


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2025-09-01", "1 September 2025", "01/09/2025"
    read day first) and the relative words "today", "yesterday" and
    "tomorrow".

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # dateutil reads "2025-09-01" as 9 January when dayfirst is set
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    try:
        dt = date_parser.parse(date_str, dayfirst=True)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def school_year_for(day: date) -> str:
    """Return the school year label containing a date, e.g. "2025-2026"."""
    start = day.year if day.month >= SCHOOL_YEAR_START_MONTH else day.year - 1
    return f"{start}-{start + 1}"
