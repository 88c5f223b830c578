"""
Domain errors raised by the service layer.

Each error is an HTTPException so FastAPI renders it directly, while tests
and other callers can still catch the specific kind.
"""

from fastapi import HTTPException, status


class BookingError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(status_code=self.status_code, detail=detail)


class NotFoundError(BookingError):
    """A referenced court, user, booking or reservation does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidTimeError(BookingError):
    """Past date, inverted range, outside business hours or too short."""


class SchedulingConflictError(BookingError):
    """An active booking already overlaps the requested interval."""


class CapacityExceededError(BookingError):
    """A shared slot already holds the maximum number of players."""


class CourtUnavailableError(BookingError):
    """The court is flagged as not bookable."""


class EmailInUseError(BookingError):
    status_code = status.HTTP_409_CONFLICT
