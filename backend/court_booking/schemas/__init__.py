from court_booking.schemas.user import UserCreate, UserResponse, UserLogin, Token
from court_booking.schemas.court import CourtCreate, CourtUpdate, CourtStatusUpdate, CourtResponse
from court_booking.schemas.booking import (
    BookingCreate,
    BookingUpdate,
    BookingStatusUpdate,
    BookingResponse,
    TimeSlotResponse,
    AvailabilityCheckResponse,
    StatusCountResponse,
)
from court_booking.schemas.reservation import ReservationCreate, ReservationResponse

__all__ = [
    "UserCreate", "UserResponse", "UserLogin", "Token",
    "CourtCreate", "CourtUpdate", "CourtStatusUpdate", "CourtResponse",
    "BookingCreate", "BookingUpdate", "BookingStatusUpdate", "BookingResponse",
    "TimeSlotResponse", "AvailabilityCheckResponse", "StatusCountResponse",
    "ReservationCreate", "ReservationResponse",
]
