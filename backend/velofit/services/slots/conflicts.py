# backend/velofit/services/slots/conflicts.py
"""
Conflict filter: marks candidate slots unavailable.

A slot is unavailable when any of:
- it starts before now (or before the lead-time threshold)
- it overlaps a booking, the booking being extended by the buffer at its end
- it overlaps an availability block
- it overlaps an active reservation lock

Blocks and locks are not extended by the buffer.
"""

from datetime import datetime
from typing import Iterable

from .calculator import TimeSlot
from .intervals import Interval, overlaps


def apply_conflicts(
    candidates: list[TimeSlot],
    bookings: Iterable,
    blocks: Iterable,
    locks: Iterable,
    now: datetime,
    buffer_minutes: int = 0,
    earliest_start: datetime | None = None,
    technician_id: int | None = None,
) -> list[TimeSlot]:
    """
    Filter candidates against occupied intervals.

    bookings/blocks/locks are any objects with start_datetime, end_datetime
    and technician_id attributes (ORM rows in practice).

    Returns:
        New list in chronological order; conflicting slots have available=False.
    """
    threshold = max(now, earliest_start) if earliest_start else now

    occupied = [
        _occupied(b, technician_id, buffer_minutes) for b in bookings
    ] + [
        _occupied(b, technician_id) for b in blocks
    ] + [
        _occupied(lk, technician_id) for lk in locks
    ]
    occupied = [interval for interval in occupied if interval is not None]

    result = []
    for slot in sorted(candidates, key=lambda s: s.start_datetime):
        if slot.start_datetime < threshold:
            result.append(slot.unavailable())
            continue

        interval = slot.interval
        if any(overlaps(interval, other) for other in occupied):
            result.append(slot.unavailable())
        else:
            result.append(slot)

    return result


def _occupied(row, technician_id: int | None, buffer_minutes: int = 0) -> Interval | None:
    """Occupied interval of a row, or None when it is outside the technician scope."""
    row_technician = getattr(row, "technician_id", None)
    if technician_id is not None and row_technician is not None and row_technician != technician_id:
        return None

    interval = Interval(row.start_datetime, row.end_datetime)
    if buffer_minutes:
        interval = interval.extended(buffer_minutes)
    return interval
