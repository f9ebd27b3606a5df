# fashion_inventory/utils/date_utils.py
from datetime import date, datetime, timedelta
from typing import Optional, Union

from fashion_inventory.exceptions import ValidationError

def get_week_start(target_date: Union[date, datetime]) -> date:
    """Get the Monday of the week containing a date.

    Weeks start on Monday; a Sunday belongs to the week that began six
    days earlier.

    Args:
        target_date: Date or datetime

    Returns:
        Date of the Monday starting that week
    """
    if isinstance(target_date, datetime):
        target_date = target_date.date()

    return target_date - timedelta(days=target_date.weekday())

def days_to_weeks(days: float, days_per_week: int = 7) -> float:
    """Convert a duration in days to weeks."""
    return days / days_per_week

def convert_to_date(date_string: str, format_string: str = "%Y-%m-%d") -> date:
    """Convert string to date.

    Args:
        date_string: Date string
        format_string: Format string

    Returns:
        Date object
    """
    return datetime.strptime(date_string, format_string).date()

def convert_to_datetime(value: Union[str, date, datetime]) -> datetime:
    """Coerce an ISO-8601 string, date or datetime into a datetime.

    Args:
        value: ISO-8601 string ('2025-08-04' or '2025-08-04T10:30:00'),
            date or datetime

    Returns:
        Datetime object

    Raises:
        ValidationError: If the string is not an ISO-8601 date
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Invalid date: {value!r}",
            details={'date': 'Expected an ISO-8601 date such as 2025-08-04'}
        )

def format_iso(value: Optional[Union[date, datetime]]) -> Optional[str]:
    """Format a date or datetime as an ISO-8601 string, passing None through."""
    if value is None:
        return None
    return value.isoformat()
