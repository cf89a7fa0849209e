"""Weekly window resolution.

Dates are naive local-calendar dates: a ``datetime`` is truncated to its own
calendar date with no timezone conversion. Two clients in different
timezones can therefore resolve "now" to different weeks around midnight.
"""
from datetime import date, datetime, timedelta
from typing import List, Tuple, Union

from mealhub.domain.errors import ValidationError
from mealhub.utilities.constants import DAYS

DateLike = Union[date, datetime]


def _as_date(value: DateLike) -> date:
    return value.date() if isinstance(value, datetime) else value


def resolve_week(reference: DateLike) -> Tuple[date, date]:
    """Return the Monday..Sunday window containing ``reference``.

    Sunday belongs to the week that started six days earlier.
    """
    ref = _as_date(reference)
    weekday_index = (ref.weekday() + 1) % 7  # Sunday = 0 .. Saturday = 6
    offset = -6 if weekday_index == 0 else 1 - weekday_index
    start = ref + timedelta(days=offset)
    return start, start + timedelta(days=6)


def week_days(start: date) -> List[date]:
    return [start + timedelta(days=i) for i in range(7)]


def date_for_day(reference: DateLike, day_name: str) -> date:
    """Date of ``day_name`` (Monday..Sunday) inside the window of ``reference``."""
    if day_name not in DAYS:
        raise ValidationError(f"Unknown day: {day_name}")
    start, _ = resolve_week(reference)
    return start + timedelta(days=DAYS.index(day_name))


def parse_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` or a full ISO-8601 datetime, keeping the calendar date only."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Date is required")
    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        # Python < 3.11 does not accept a trailing 'Z'
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    except ValueError:
        raise ValidationError(f"Invalid date: {value}")


__all__ = ['resolve_week', 'week_days', 'date_for_day', 'parse_date']
