"""Tests for half-open interval helpers."""

from datetime import datetime

import pytest

from velofit.errors import InvalidInterval
from velofit.services.slots.intervals import (
    Interval,
    add_minutes,
    add_months,
    is_after,
    is_before,
    overlaps,
)


def iv(start_h, start_m, end_h, end_m) -> Interval:
    return Interval(datetime(2025, 3, 10, start_h, start_m), datetime(2025, 3, 10, end_h, end_m))


class TestOverlaps:
    @pytest.mark.parametrize("a, b, expected", [
        (iv(10, 0, 11, 0), iv(10, 30, 11, 30), True),
        (iv(10, 0, 11, 0), iv(10, 15, 10, 45), True),
        (iv(10, 0, 11, 0), iv(10, 0, 11, 0), True),
        (iv(10, 0, 11, 0), iv(11, 0, 12, 0), False),
        (iv(10, 0, 11, 0), iv(12, 0, 13, 0), False),
    ])
    def test_overlap_is_symmetric(self, a, b, expected):
        assert overlaps(a, b) is expected
        assert overlaps(b, a) is expected

    def test_touching_intervals_do_not_overlap(self):
        morning = iv(9, 0, 10, 0)
        next_slot = iv(10, 0, 10, 30)
        assert not overlaps(morning, next_slot)
        assert not overlaps(next_slot, morning)


class TestInterval:
    def test_end_before_start_is_invalid(self):
        with pytest.raises(InvalidInterval):
            iv(11, 0, 10, 0)

    def test_empty_interval_is_invalid(self):
        with pytest.raises(InvalidInterval):
            iv(10, 0, 10, 0)

    def test_extended_pushes_end_only(self):
        extended = iv(10, 0, 11, 0).extended(15)
        assert extended.start == datetime(2025, 3, 10, 10, 0)
        assert extended.end == datetime(2025, 3, 10, 11, 15)


class TestDateHelpers:
    def test_add_minutes_crosses_midnight(self):
        assert add_minutes(datetime(2025, 3, 10, 23, 50), 20) == datetime(2025, 3, 11, 0, 10)

    def test_add_months_clamps_to_month_end(self):
        assert add_months(datetime(2025, 1, 31, 12, 0), 1) == datetime(2025, 2, 28, 12, 0)

    def test_add_months_rolls_over_year(self):
        assert add_months(datetime(2025, 11, 30, 8, 0), 3) == datetime(2026, 2, 28, 8, 0)
        assert add_months(datetime(2025, 12, 15), 1) == datetime(2026, 1, 15)

    def test_before_after(self):
        early, late = datetime(2025, 3, 10, 9), datetime(2025, 3, 10, 10)
        assert is_before(early, late) and not is_before(late, early)
        assert is_after(late, early) and not is_after(early, early)
