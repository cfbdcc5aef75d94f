from datetime import date, datetime, time
from typing import Any

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta


def as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def as_datetime(value: date | datetime) -> datetime:
    """Naive datetime for value; dates become midnight, tz info is dropped."""
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    return datetime.combine(value, time.min)


def start_of_day(value: date | datetime) -> datetime:
    return datetime.combine(as_date(value), time.min)


def end_of_day(value: date | datetime) -> datetime:
    return datetime.combine(as_date(value), time.max)


def shift(d: date, delta: relativedelta) -> date:
    """d + delta, raising OverflowError when the result leaves years 1..9999."""
    try:
        return d + delta
    except (OverflowError, ValueError) as e:
        raise OverflowError(f"{d} + {delta} is out of range") from e


def parse_date(value: Any) -> date | None:
    """Parse a date, datetime or ISO 8601 string into a date, None on failure."""
    if isinstance(value, (date, datetime)):
        return as_date(value)
    stamp = parse_timestamp(value)
    return stamp.date() if stamp is not None else None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a transaction timestamp, returning None when it can't be read.

    Accepts datetime, date and ISO 8601 strings (``2024-01-05``,
    ``2024-01-05T10:00:00Z``). Offsets are discarded: the engine works at
    day granularity on the wall-clock time the store recorded.
    """
    if isinstance(value, (date, datetime)):
        return as_datetime(value)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return isoparse(value.strip()).replace(tzinfo=None)
    except (ValueError, OverflowError):
        return None
