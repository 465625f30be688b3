from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional

import pytz

logger = logging.getLogger(__name__)


def parse_utc_offset(timezone_str: str) -> Optional[float]:
    """
    Parse strings like UTC+3, UTC-5, UTC+5:30 and return the offset in hours.

    Returns None when the string is not in that format.
    """
    pattern = r'^UTC([+-])(\d{1,2})(?::(\d{2}))?$'
    match = re.match(pattern, timezone_str)

    if match:
        sign = match.group(1)
        hours = int(match.group(2))
        minutes = int(match.group(3)) if match.group(3) else 0

        total_hours = hours + (minutes / 60)

        if sign == '-':
            total_hours = -total_hours

        return total_hours

    return None


def validate_timezone(timezone_str: str) -> bool:
    """
    Check that the string is a known timezone.
    Both IANA names and the UTC+3 format are accepted.
    """
    if timezone_str.startswith("UTC") and timezone_str != "UTC":
        return parse_utc_offset(timezone_str) is not None

    try:
        pytz.timezone(timezone_str)
        return True
    except pytz.exceptions.UnknownTimeZoneError:
        return False


def resolve_timezone(user_timezone: Optional[str]) -> tzinfo:
    """Turn a timezone string into tzinfo, falling back to UTC."""
    if not user_timezone or user_timezone == "UTC":
        return timezone.utc

    if user_timezone.startswith("UTC"):
        offset = parse_utc_offset(user_timezone)
        if offset is not None:
            return timezone(timedelta(hours=offset))

    try:
        return pytz.timezone(user_timezone)
    except pytz.exceptions.UnknownTimeZoneError:
        logger.warning("Unknown timezone %r, using UTC", user_timezone)
        return timezone.utc


def utc_now() -> datetime:
    """Naive UTC timestamp, the format day records are stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_user_time(moment: datetime, user_timezone: Optional[str]) -> datetime:
    """Convert a stored timestamp to the user's local time. Naive values are UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(resolve_timezone(user_timezone))


def get_user_local_time(user_timezone: Optional[str], now: Optional[datetime] = None) -> datetime:
    """
    Current local time of the user.
    If the timezone is not set, UTC is returned.
    """
    return to_user_time(now if now is not None else utc_now(), user_timezone)


def calendar_day(moment: datetime, user_timezone: Optional[str]) -> date:
    """Calendar day of the timestamp in the user's timezone."""
    return to_user_time(moment, user_timezone).date()


def whole_calendar_days(start: datetime, end: datetime, user_timezone: Optional[str]) -> int:
    """Number of calendar-day boundaries between two timestamps, negative if end is earlier."""
    return (calendar_day(end, user_timezone) - calendar_day(start, user_timezone)).days


def same_local_time_on(day: date, moment: datetime, user_timezone: Optional[str]) -> datetime:
    """Naive UTC timestamp for `day` at the local time of day of `moment`."""
    tz = resolve_timezone(user_timezone)
    local = datetime.combine(day, to_user_time(moment, user_timezone).time())
    if hasattr(tz, "localize"):
        aware = tz.normalize(tz.localize(local))
    else:
        aware = local.replace(tzinfo=tz)
    return aware.astimezone(timezone.utc).replace(tzinfo=None)
