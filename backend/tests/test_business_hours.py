"""
Tests for the operating window: slot generation and time-rule validation.
"""

from datetime import date, time, timedelta

import pytest

from court_booking.core.exceptions import InvalidTimeError
from court_booking.services.availability import generate_slots
from court_booking.services.business_hours import BusinessHours
from court_booking.services.intervals import TimeInterval

TODAY = date(2030, 5, 10)


def test_default_window_has_sixteen_hourly_slots(hours):
    slots = list(hours.iter_slots())
    assert len(slots) == 16
    assert slots[0] == TimeInterval(time(6, 0), time(7, 0))
    assert slots[-1] == TimeInterval(time(21, 0), time(22, 0))


def test_trailing_partial_slot_is_dropped():
    hours = BusinessHours(opening=time(8, 0), closing=time(10, 30))
    assert [s.start for s in hours.iter_slots()] == [time(8, 0), time(9, 0)]


def test_window_must_be_ordered():
    with pytest.raises(ValueError):
        BusinessHours(opening=time(22, 0), closing=time(6, 0))


def test_slots_overlapping_bookings_are_unavailable(hours):
    booked = [
        TimeInterval(time(10, 0), time(12, 0)),
        TimeInterval(time(15, 30), time(16, 30)),
    ]
    taken = {s.start_time for s in generate_slots(hours, booked) if not s.available}
    assert taken == {time(10, 0), time(11, 0), time(15, 0), time(16, 0)}


def test_validate_returns_interval(hours):
    interval = hours.validate(TODAY, time(14, 0), time(16, 0), today=TODAY)
    assert interval == TimeInterval(time(14, 0), time(16, 0))


def test_full_day_is_valid(hours):
    assert hours.validate(TODAY, time(6, 0), time(22, 0), today=TODAY).duration == timedelta(hours=16)


@pytest.mark.parametrize("booking_date, start, end, message", [
    (TODAY - timedelta(days=1), time(10, 0), time(11, 0), "past"),
    (TODAY, time(11, 0), time(10, 0), "before end"),
    (TODAY, time(10, 0), time(10, 0), "before end"),
    (TODAY, time(5, 0), time(7, 0), "between"),
    (TODAY, time(21, 0), time(23, 0), "between"),
    (TODAY, time(10, 0), time(10, 30), "Minimum"),
])
def test_invalid_times(hours, booking_date, start, end, message):
    with pytest.raises(InvalidTimeError) as exc:
        hours.validate(booking_date, start, end, today=TODAY)
    assert exc.value.status_code == 400
    assert message in exc.value.detail


def test_past_date_is_reported_before_other_problems(hours):
    with pytest.raises(InvalidTimeError) as exc:
        hours.validate(TODAY - timedelta(days=3), time(23, 0), time(5, 0), today=TODAY)
    assert exc.value.detail == "Cannot book a date in the past"
