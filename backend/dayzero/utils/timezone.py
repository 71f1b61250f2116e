"""
Timezone Utilities - Centralized timezone and day-identifier handling
"""
from datetime import date, datetime, timedelta
from typing import Optional, Tuple, Union
import pytz

from dayzero.core.constants import DAY_ID_FORMAT
from dayzero.core.exceptions import ValidationError

Instant = Union[datetime, int, float]


def get_tz(tz: str):
    """
    Get a pytz timezone object for an IANA identifier

    Raises:
        ValidationError: If the timezone name is unknown
    """
    try:
        return pytz.timezone(tz)
    except pytz.UnknownTimeZoneError:
        raise ValidationError(f"Unknown timezone: {tz}")


def is_valid_timezone(tz: str) -> bool:
    try:
        get_tz(tz)
        return True
    except ValidationError:
        return False


def utc_now() -> datetime:
    """Current instant as a timezone-aware UTC datetime"""
    return datetime.now(pytz.utc)


def now_ms() -> int:
    """Current instant as epoch milliseconds"""
    return int(utc_now().timestamp() * 1000)


def to_utc(instant: Optional[Instant] = None) -> datetime:
    """
    Normalize an instant to an aware UTC datetime

    Args:
        instant: Aware datetime, naive datetime (taken as UTC), epoch
                 milliseconds, or None for now
    """
    if instant is None:
        return utc_now()
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            return pytz.utc.localize(instant)
        return instant.astimezone(pytz.utc)
    return datetime.fromtimestamp(instant / 1000.0, pytz.utc)


def local_now(tz: str, instant: Optional[Instant] = None) -> datetime:
    """Wall-clock datetime of an instant in the given timezone"""
    return to_utc(instant).astimezone(get_tz(tz))


def local_day_id(tz: str, instant: Optional[Instant] = None) -> str:
    """
    Calendar date (YYYY-MM-DD) an instant falls on in a timezone.
    Midnight-to-midnight civil day boundaries.
    """
    return local_now(tz, instant).strftime(DAY_ID_FORMAT)


def parse_day_id(day_id: str) -> date:
    """
    Parse a YYYY-MM-DD day identifier

    Raises:
        ValidationError: If the string is not a valid calendar date
    """
    try:
        parsed = datetime.strptime(day_id, DAY_ID_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid day id '{day_id}'. Use YYYY-MM-DD")
    # strptime also takes unpadded fields like 2024-1-3
    if parsed.strftime(DAY_ID_FORMAT) != day_id:
        raise ValidationError(f"Invalid day id '{day_id}'. Use YYYY-MM-DD")
    return parsed


def is_valid_day_id(day_id: str) -> bool:
    try:
        parse_day_id(day_id)
        return True
    except ValidationError:
        return False


def shift_day_id(day_id: str, days: int) -> str:
    """
    Move a day identifier by whole calendar days.
    Nominal date arithmetic, so DST transitions never skip or repeat a day.
    """
    return (parse_day_id(day_id) + timedelta(days=days)).strftime(DAY_ID_FORMAT)


def week_bounds(day_id: str) -> Tuple[str, str]:
    """
    Sunday..Saturday window containing a day

    Returns:
        (first_day_id, last_day_id), both inclusive
    """
    day = parse_day_id(day_id)
    # date.weekday(): Monday=0 .. Sunday=6
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    end = start + timedelta(days=6)
    return start.strftime(DAY_ID_FORMAT), end.strftime(DAY_ID_FORMAT)
