"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Small parsing and money helpers shared by the API views.
-------------------------------------------------------------------------
"""
import calendar
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

from django.utils import timezone

from apps.core.exceptions import ValidationFailed

TWO_PLACES = Decimal('0.01')

MONTH_NAMES = [calendar.month_name[i] for i in range(1, 13)]
MONTH_ABBRS = [calendar.month_abbr[i] for i in range(1, 13)]


def money(value: Any) -> Decimal:
    """Round a number to paise (2 dp, half up)."""
    if value is None:
        return Decimal('0.00')
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def to_decimal(value: Any, field: str, required: bool = True,
               positive: bool = False, allow_zero: bool = True) -> Optional[Decimal]:
    """
    Parse a request value into a Decimal.

    Raises:
        ValidationFailed: When missing (and required) or not numeric.
    """
    if value is None or value == '':
        if required:
            raise ValidationFailed(f"{field} is required")
        return None
    if isinstance(value, bool):
        raise ValidationFailed(f"{field} must be a number")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationFailed(f"{field} must be a number")
    if not number.is_finite():
        raise ValidationFailed(f"{field} must be a number")
    if positive and number <= 0:
        raise ValidationFailed(f"{field} must be greater than 0")
    if not allow_zero and number == 0:
        raise ValidationFailed(f"{field} must not be zero")
    return number


def to_int(value: Any, field: str, required: bool = True,
           minimum: Optional[int] = None, maximum: Optional[int] = None) -> Optional[int]:
    """Parse an integer parameter with optional bounds."""
    if value is None or value == '':
        if required:
            raise ValidationFailed(f"{field} is required")
        return None
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ValidationFailed(f"Invalid {field}")
    if minimum is not None and number < minimum:
        raise ValidationFailed(f"Invalid {field}")
    if maximum is not None and number > maximum:
        raise ValidationFailed(f"Invalid {field}")
    return number


def to_date(value: Any, field: str, required: bool = True) -> Optional[date]:
    """Parse YYYY-MM-DD (or an ISO datetime) into a date."""
    if value is None or value == '':
        if required:
            raise ValidationFailed(f"{field} is required")
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise ValidationFailed(f"Invalid {field}, expected YYYY-MM-DD")


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


def today() -> date:
    return timezone.localdate()


def month_bounds(year: int, month: int):
    """First and last day of a month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, clamping the day to the month length (31 -> 30/28/29)."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def previous_month(year: int, month: int):
    if month == 1:
        return year - 1, 12
    return year, month - 1


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


# Accepted range for year and month inputs
MIN_YEAR = 2000
MAX_YEAR = 2100


def parse_month_key(value: Any, field: str = 'Month'):
    """
    Parse a ``YYYY-MM`` month key.

    Returns:
        (year, month) tuple.

    Raises:
        ValidationFailed: When missing or malformed.
    """
    text = str(value or '').strip()
    if not text:
        raise ValidationFailed(f"{field} is required")
    parts = text.split('-')
    if len(parts) != 2 or not all(part.isdigit() for part in parts) or len(parts[0]) != 4:
        raise ValidationFailed(f"Invalid {field}, expected YYYY-MM")
    year, month = int(parts[0]), int(parts[1])
    if not 1 <= month <= 12 or not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationFailed(f"Invalid {field}, expected YYYY-MM")
    return year, month
