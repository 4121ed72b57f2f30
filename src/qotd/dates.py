"""Calendar date helpers.

Persisted dates use the ``"Mon Jan 01 2024"`` form. The names are spelled out
here rather than taken from ``strftime`` so stored keys never depend on the
process locale.
"""
from datetime import date, datetime, timedelta

DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
MONTH_NAMES = ["January", "February", "March", "April", "May", "June",
               "July", "August", "September", "October", "November", "December"]


def date_key(day: date) -> str:
    """Storage form of a date, e.g. ``Mon Jan 01 2024``."""
    return f"{DAY_ABBR[day.weekday()]} {MONTH_ABBR[day.month - 1]} {day.day:02d} {day.year}"


def long_date(day: date) -> str:
    """Display form, e.g. ``Monday, January 1, 2024``."""
    return f"{DAY_NAMES[day.weekday()]}, {MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


def month_label(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"


def yesterday(day: date) -> date:
    return day - timedelta(days=1)


def as_date(value: date | datetime) -> date:
    """Accept a datetime wherever a date is expected."""
    if isinstance(value, datetime):
        return value.date()
    return value
