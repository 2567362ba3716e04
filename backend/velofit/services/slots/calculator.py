# backend/velofit/services/slots/calculator.py
"""
Candidate slot generation.

Walks the open interval of a day in `step_minutes` increments and emits
[t, t + duration) for every t whose slot still ends by closing time.

Contains:
✓ opening hours (via the resolved open interval)
✓ service duration

Does NOT contain:
✗ Buffer (applied to existing bookings by the conflict filter)
✗ Bookings, blocks, locks (conflict filter)
"""

from dataclasses import dataclass, replace
from datetime import datetime

from .intervals import Interval, add_minutes


@dataclass(frozen=True)
class TimeSlot:
    start_datetime: datetime
    end_datetime: datetime
    available: bool = True
    technician_id: int | None = None
    technician_name: str | None = None

    @property
    def interval(self) -> Interval:
        return Interval(self.start_datetime, self.end_datetime)

    def unavailable(self) -> "TimeSlot":
        return replace(self, available=False)


def generate_candidates(
    open_interval: Interval,
    duration_minutes: int,
    step_minutes: int = 30,
    technician_id: int | None = None,
    technician_name: str | None = None,
) -> list[TimeSlot]:
    """
    Enumerate candidate slots for one day.

    Returns:
        Chronological list of TimeSlot, all available=True.
    """
    if duration_minutes <= 0:
        raise ValueError(f"duration_minutes must be positive, got {duration_minutes}")

    slots: list[TimeSlot] = []
    t = open_interval.start

    while add_minutes(t, duration_minutes) <= open_interval.end:
        slots.append(TimeSlot(
            start_datetime=t,
            end_datetime=add_minutes(t, duration_minutes),
            technician_id=technician_id,
            technician_name=technician_name,
        ))
        t = add_minutes(t, step_minutes)

    return slots
