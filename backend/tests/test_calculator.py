"""Tests for candidate slot generation."""

from datetime import datetime

import pytest

from velofit.services.slots.calculator import generate_candidates
from velofit.services.slots.intervals import Interval


DAY = Interval(datetime(2025, 3, 10, 9, 0), datetime(2025, 3, 10, 19, 0))


def test_hour_service_on_half_hour_grid():
    slots = generate_candidates(DAY, duration_minutes=60, step_minutes=30)

    assert len(slots) == 19
    assert slots[0].start_datetime == datetime(2025, 3, 10, 9, 0)
    assert slots[0].end_datetime == datetime(2025, 3, 10, 10, 0)
    assert slots[-1].start_datetime == datetime(2025, 3, 10, 18, 0)
    assert slots[-1].end_datetime == datetime(2025, 3, 10, 19, 0)
    assert all(slot.available for slot in slots)


def test_last_slot_must_end_by_closing_time():
    slots = generate_candidates(DAY, duration_minutes=90, step_minutes=30)
    assert slots[-1].start_datetime == datetime(2025, 3, 10, 17, 30)


def test_service_longer_than_opening_yields_nothing():
    short_day = Interval(datetime(2025, 3, 10, 9, 0), datetime(2025, 3, 10, 10, 0))
    assert generate_candidates(short_day, duration_minutes=90) == []


def test_technician_is_carried_on_every_slot():
    slots = generate_candidates(DAY, 60, 60, technician_id=3, technician_name="Julien")
    assert len(slots) == 10
    assert {(s.technician_id, s.technician_name) for s in slots} == {(3, "Julien")}


def test_non_positive_duration_is_rejected():
    with pytest.raises(ValueError):
        generate_candidates(DAY, duration_minutes=0)
