"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024", ...) and the
    relative forms "today", "yesterday", "tomorrow" and "N days ago".

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

    # "3 days ago", "1 day ago"
    parts = date_str.split()
    if len(parts) == 3 and parts[1] in ("day", "days") and parts[2] == "ago":
        try:
            return today - timedelta(days=int(parts[0]))
        except ValueError:
            raise ValueError(f"Could not parse date '{date_str}'")

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def as_date(moment: date | datetime) -> date:
    """Return the calendar day of a date or datetime."""
    if isinstance(moment, datetime):
        return moment.date()
    return moment
