"""
DD-Mon-YY date handling

Dates travel as two-digit day, capitalised English month abbreviation and
two-digit year (``01-Jan-17``). The century is resolved with a pivot rather
than left to the store's locale.
"""
import calendar
import re
from datetime import date
from typing import Optional

from retail_orders.config import settings
from retail_orders.exceptions import InvalidDate

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# ASCII digits only; ``\d`` would also accept other scripts' digits
_DATE_PATTERN = re.compile(r"([0-9]{2})-([A-Z][a-z]{2})-([0-9]{2})")


def resolve_year(two_digit_year: int, pivot: Optional[int] = None) -> int:
    """Map 00-99 onto a four-digit year around ``pivot``"""
    if pivot is None:
        pivot = settings.TWO_DIGIT_YEAR_PIVOT
    if two_digit_year < pivot:
        return 2000 + two_digit_year
    return 1900 + two_digit_year


def parse_store_date(value: str, pivot: Optional[int] = None) -> date:
    """
    Parse a DD-Mon-YY string into a date

    Raises:
        InvalidDate: If the text is not in lexical form or names a day the
            month does not have
    """
    if not isinstance(value, str):
        raise InvalidDate(value, "expected text in DD-Mon-YY form")

    match = _DATE_PATTERN.fullmatch(value)
    if not match:
        raise InvalidDate(value, "expected DD-Mon-YY, e.g. 01-Jan-17")

    day_text, month_text, year_text = match.groups()
    if month_text not in MONTHS:
        raise InvalidDate(value, f"unknown month {month_text!r}")

    day = int(day_text)
    if not 1 <= day <= 31:
        raise InvalidDate(value, "day must be between 01 and 31")

    month = MONTHS.index(month_text) + 1
    year = resolve_year(int(year_text), pivot)
    if day > calendar.monthrange(year, month)[1]:
        raise InvalidDate(value, f"{month_text} {year} has no day {day}")

    return date(year, month, day)


def format_store_date(value: date) -> str:
    """Render a date in DD-Mon-YY form"""
    return f"{value.day:02d}-{MONTHS[value.month - 1]}-{value.year % 100:02d}"


def year_bounds(year: int) -> tuple:
    """Half-open [1 Jan year, 1 Jan year+1) window"""
    if not 1 <= year < 9999:
        raise InvalidDate(year, "year must be between 1 and 9998")
    return date(year, 1, 1), date(year + 1, 1, 1)
