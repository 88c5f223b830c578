"""
Half-open time intervals within a single day.

`[start, end)` excludes the end instant, so 10:00-11:00 and 11:00-12:00 can
sit next to each other without overlapping.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta


@dataclass(frozen=True)
class TimeInterval:
    start: time
    end: time

    @property
    def duration(self) -> timedelta:
        return _as_datetime(self.end) - _as_datetime(self.start)

    def __str__(self) -> str:
        return f"{self.start:%H:%M}-{self.end:%H:%M}"


def _as_datetime(value: time) -> datetime:
    return datetime.combine(date.min, value)


def add_to_time(value: time, delta: timedelta) -> time:
    return (_as_datetime(value) + delta).time()


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    return a.start < b.end and a.end > b.start


def duration_hours(interval: TimeInterval) -> int:
    """Whole hours in the interval; partial hours are truncated, not rounded."""
    return int(interval.duration.total_seconds() // 3600)
