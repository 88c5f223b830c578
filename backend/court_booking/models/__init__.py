from court_booking.models.user import User, UserRole
from court_booking.models.court import Court
from court_booking.models.booking import Booking, BookingStatus
from court_booking.models.reservation import Reservation, ReservationStatus, reservation_participants

__all__ = [
    "User", "UserRole",
    "Court",
    "Booking", "BookingStatus",
    "Reservation", "ReservationStatus", "reservation_participants",
]
