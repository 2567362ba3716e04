"""Tests for opening hours resolution."""

import json
from datetime import date, datetime

import pytest

from velofit.errors import InvalidInterval
from velofit.services.slots.schedule import resolve_day

from conftest import MONDAY, SUNDAY, opening_hours


def test_open_day_resolves_to_concrete_interval():
    interval = resolve_day(opening_hours(), MONDAY)
    assert interval.start == datetime(2025, 3, 10, 9, 0)
    assert interval.end == datetime(2025, 3, 10, 19, 0)


def test_closed_day_returns_none():
    assert resolve_day(opening_hours(), SUNDAY) is None


def test_missing_day_is_closed():
    hours = {"monday": {"open": "08:30", "close": "12:00", "closed": False}}
    assert resolve_day(hours, date(2025, 3, 11)) is None
    assert resolve_day(hours, MONDAY).start == datetime(2025, 3, 10, 8, 30)


def test_day_without_times_is_closed():
    hours = json.dumps({"monday": {"closed": False}})
    assert resolve_day(hours, MONDAY) is None


@pytest.mark.parametrize("raw", [None, "", "not json", "[]"])
def test_unusable_schedule_is_closed(raw):
    assert resolve_day(raw, MONDAY) is None


def test_close_before_open_is_invalid():
    hours = {"monday": {"open": "18:00", "close": "09:00", "closed": False}}
    with pytest.raises(InvalidInterval):
        resolve_day(hours, MONDAY)


@pytest.mark.parametrize("open_, close", [("9h", "19:00"), ("09:00", "7pm"), ("09:00", "19:xx")])
def test_malformed_times_are_invalid(open_, close):
    hours = {"monday": {"open": open_, "close": close, "closed": False}}
    with pytest.raises(InvalidInterval):
        resolve_day(hours, MONDAY)
