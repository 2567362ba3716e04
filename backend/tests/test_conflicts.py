"""Tests for the conflict filter."""

from datetime import datetime
from types import SimpleNamespace

from velofit.services.slots.calculator import generate_candidates
from velofit.services.slots.conflicts import apply_conflicts
from velofit.services.slots.intervals import Interval

from conftest import NOW, at


def row(start: datetime, end: datetime, technician_id=None):
    return SimpleNamespace(start_datetime=start, end_datetime=end, technician_id=technician_id)


def half_hour_slots(duration=30, technician_id=None):
    return generate_candidates(Interval(at(9), at(13)), duration, 30, technician_id=technician_id)


def unavailable_starts(slots):
    return [s.start_datetime.strftime("%H:%M") for s in slots if not s.available]


def test_no_occupiers_keeps_everything_available():
    slots = apply_conflicts(half_hour_slots(), [], [], [], now=NOW, buffer_minutes=15)
    assert unavailable_starts(slots) == []


def test_buffer_extends_booking_end_only():
    booking = row(at(10), at(11))
    slots = apply_conflicts(half_hour_slots(), [booking], [], [], now=NOW, buffer_minutes=15)

    # 09:30-10:00 ends exactly when the booking starts
    assert unavailable_starts(slots) == ["10:00", "10:30", "11:00"]


def test_blocks_are_not_buffer_extended():
    block = row(at(10), at(11))
    slots = apply_conflicts(half_hour_slots(), [], [block], [], now=NOW, buffer_minutes=15)
    assert unavailable_starts(slots) == ["10:00", "10:30"]


def test_locks_are_not_buffer_extended():
    lock = row(at(11), at(12))
    slots = apply_conflicts(half_hour_slots(), [], [], [lock], now=NOW, buffer_minutes=15)
    assert unavailable_starts(slots) == ["11:00", "11:30"]


def test_past_slots_are_unavailable():
    slots = apply_conflicts(half_hour_slots(), [], [], [], now=at(10, 10), buffer_minutes=15)
    assert unavailable_starts(slots) == ["09:00", "09:30", "10:00"]


def test_lead_time_threshold():
    slots = apply_conflicts(
        half_hour_slots(), [], [], [], now=NOW, earliest_start=at(11)
    )
    assert unavailable_starts(slots) == ["09:00", "09:30", "10:00", "10:30"]


def test_technician_scope():
    other_tech = row(at(10), at(11), technician_id=2)
    store_wide = row(at(12), at(12, 30))

    for_tech_1 = apply_conflicts(
        half_hour_slots(technician_id=1), [other_tech], [store_wide], [],
        now=NOW, buffer_minutes=0, technician_id=1,
    )
    assert unavailable_starts(for_tech_1) == ["12:00"]

    for_store = apply_conflicts(
        half_hour_slots(), [other_tech], [store_wide], [], now=NOW, buffer_minutes=0,
    )
    assert unavailable_starts(for_store) == ["10:00", "10:30", "12:00"]


def test_result_is_chronological():
    candidates = list(reversed(half_hour_slots()))
    slots = apply_conflicts(candidates, [], [], [], now=NOW)
    starts = [s.start_datetime for s in slots]
    assert starts == sorted(starts)


def test_candidates_are_not_mutated():
    candidates = half_hour_slots()
    apply_conflicts(candidates, [row(at(9), at(13))], [], [], now=NOW)
    assert all(s.available for s in candidates)
