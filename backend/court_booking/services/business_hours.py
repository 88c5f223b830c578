"""
Club operating window and booking-time validation.

BusinessHours is built once from settings and handed to the availability
generator and the booking lifecycle, so tests can run with other windows.
"""

from dataclasses import dataclass
from datetime import date, time, timedelta
from functools import lru_cache
from typing import Iterator, Optional

from court_booking.core.config import Settings, get_settings
from court_booking.core.exceptions import InvalidTimeError
from court_booking.services.intervals import TimeInterval, add_to_time


@dataclass(frozen=True)
class BusinessHours:
    opening: time = time(6, 0)
    closing: time = time(22, 0)
    slot_width: timedelta = timedelta(hours=1)
    min_duration: timedelta = timedelta(hours=1)

    def __post_init__(self):
        if self.opening >= self.closing:
            raise ValueError("opening time must be before closing time")
        if self.slot_width <= timedelta(0):
            raise ValueError("slot width must be positive")

    @classmethod
    def from_settings(cls, settings: Settings) -> "BusinessHours":
        return cls(
            opening=settings.OPENING_TIME,
            closing=settings.CLOSING_TIME,
            slot_width=timedelta(minutes=settings.SLOT_MINUTES),
            min_duration=timedelta(minutes=settings.MIN_BOOKING_MINUTES),
        )

    def contains(self, interval: TimeInterval) -> bool:
        return self.opening <= interval.start and interval.end <= self.closing

    def iter_slots(self) -> Iterator[TimeInterval]:
        """Consecutive slots from opening; a trailing partial slot is dropped."""
        cursor = self.opening
        while True:
            end = add_to_time(cursor, self.slot_width)
            # end <= cursor means the slot wrapped past midnight
            if end > self.closing or end <= cursor:
                return
            yield TimeInterval(cursor, end)
            cursor = end

    def validate(
        self,
        booking_date: date,
        start: time,
        end: time,
        today: Optional[date] = None,
    ) -> TimeInterval:
        """Return the requested interval or raise InvalidTimeError."""
        today = today or date.today()
        if booking_date < today:
            raise InvalidTimeError("Cannot book a date in the past")

        if start >= end:
            raise InvalidTimeError("Start time must be before end time")

        interval = TimeInterval(start, end)
        if not self.contains(interval):
            raise InvalidTimeError(
                f"Bookings must be between {self.opening:%H:%M} and {self.closing:%H:%M}"
            )

        if interval.duration < self.min_duration:
            minutes = int(self.min_duration.total_seconds() // 60)
            raise InvalidTimeError(f"Minimum booking duration is {minutes} minutes")

        return interval


@lru_cache()
def get_business_hours() -> BusinessHours:
    return BusinessHours.from_settings(get_settings())
