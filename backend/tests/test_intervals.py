"""
Tests for half-open interval arithmetic.
"""

from datetime import time, timedelta

import pytest

from court_booking.services.intervals import TimeInterval, add_to_time, duration_hours, overlaps


def iv(start: str, end: str) -> TimeInterval:
    return TimeInterval(time.fromisoformat(start), time.fromisoformat(end))


@pytest.mark.parametrize("a, b", [
    (iv("10:00", "11:00"), iv("10:30", "11:30")),
    (iv("10:00", "12:00"), iv("10:30", "11:00")),
    (iv("10:00", "11:00"), iv("10:00", "11:00")),
])
def test_overlapping_intervals(a, b):
    assert overlaps(a, b)
    assert overlaps(b, a)


def test_touching_intervals_do_not_overlap():
    """The end instant is excluded, so back-to-back ranges can coexist."""
    assert not overlaps(iv("10:00", "11:00"), iv("11:00", "12:00"))
    assert not overlaps(iv("11:00", "12:00"), iv("10:00", "11:00"))


def test_disjoint_intervals():
    assert not overlaps(iv("08:00", "09:00"), iv("14:00", "16:00"))


def test_duration_hours_truncates_partial_hours():
    assert duration_hours(iv("14:00", "16:00")) == 2
    assert duration_hours(iv("10:00", "11:30")) == 1
    assert duration_hours(iv("10:00", "10:45")) == 0


def test_add_to_time():
    assert add_to_time(time(9, 30), timedelta(minutes=45)) == time(10, 15)


def test_interval_str():
    assert str(iv("06:00", "07:30")) == "06:00-07:30"
