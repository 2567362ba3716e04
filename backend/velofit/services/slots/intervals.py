# backend/velofit/services/slots/intervals.py
"""
Temporal interval helpers.

Intervals are half-open: [start, end). Two intervals that only touch
(a.end == b.start) do not overlap.
"""

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta

from ...errors import InvalidInterval


@dataclass(frozen=True)
class Interval:
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.end <= self.start:
            raise InvalidInterval(
                f"Invalid interval: end {self.end.isoformat()} <= start {self.start.isoformat()}"
            )

    def extended(self, minutes: int) -> "Interval":
        """Same interval with the end pushed back by `minutes`."""
        return Interval(self.start, add_minutes(self.end, minutes))


def overlaps(a: Interval, b: Interval) -> bool:
    return a.start < b.end and b.start < a.end


def add_minutes(t: datetime, n: int) -> datetime:
    return t + timedelta(minutes=n)


def add_months(t: datetime, n: int) -> datetime:
    """Add calendar months, clamping the day to the end of the target month."""
    month_index = t.month - 1 + n
    year = t.year + month_index // 12
    month = month_index % 12 + 1
    day = min(t.day, calendar.monthrange(year, month)[1])
    return t.replace(year=year, month=month, day=day)


def is_before(t1: datetime, t2: datetime) -> bool:
    return t1 < t2


def is_after(t1: datetime, t2: datetime) -> bool:
    return t1 > t2
