# backend/velofit/services/slots/schedule.py
"""
Store opening hours → concrete open interval for a date.

opening_hours format (JSON text or dict):
    {
        "monday":    {"open": "09:00", "close": "19:00", "closed": false},
        ...
        "sunday":    {"open": "09:00", "close": "19:00", "closed": true}
    }

A day that is missing, marked closed or has no open/close times is closed.
"""

import json
from datetime import date, datetime, timedelta

from ...errors import InvalidInterval
from .config import time_str_to_minutes
from .intervals import Interval

DAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def resolve_day(opening_hours: str | dict | None, target_date: date) -> Interval | None:
    """
    Resolve the open interval of target_date.

    Returns:
        Interval [open, close) on that date, or None when the store is closed.

    Raises:
        InvalidInterval: unparsable open/close times, or close <= open.
    """
    schedule = _load(opening_hours)
    day = schedule.get(DAY_NAMES[target_date.weekday()])

    if not isinstance(day, dict) or day.get("closed"):
        return None

    open_str = day.get("open")
    close_str = day.get("close")
    if not open_str or not close_str:
        return None

    try:
        open_minutes = time_str_to_minutes(open_str)
        close_minutes = time_str_to_minutes(close_str)
    except (ValueError, AttributeError) as e:
        raise InvalidInterval(f"Invalid opening hours: {open_str!r}-{close_str!r}") from e

    midnight = datetime.combine(target_date, datetime.min.time())
    return Interval(
        midnight + timedelta(minutes=open_minutes),
        midnight + timedelta(minutes=close_minutes),
    )


def _load(opening_hours: str | dict | None) -> dict:
    if not opening_hours:
        return {}
    if isinstance(opening_hours, dict):
        return opening_hours
    try:
        schedule = json.loads(opening_hours)
    except json.JSONDecodeError:
        return {}
    return schedule if isinstance(schedule, dict) else {}
