"""
Pydantic schemas for booking-related request/response validation.
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field

from court_booking.models.booking import BookingStatus


def reject_utc_offset(value: time) -> time:
    # Booking times are wall-clock times in the club's single local zone
    if value.tzinfo is not None:
        raise ValueError("time must not carry a UTC offset")
    return value


NaiveTime = Annotated[time, AfterValidator(reject_utc_offset)]


class BookingCreate(BaseModel):
    court_id: int
    booking_date: date
    start_time: NaiveTime
    end_time: NaiveTime
    notes: Optional[str] = Field(None, max_length=500)


class BookingUpdate(BaseModel):
    booking_date: date
    start_time: NaiveTime
    end_time: NaiveTime
    notes: Optional[str] = Field(None, max_length=500)


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingResponse(BaseModel):
    id: int
    court_id: int
    user_id: int
    booking_date: date
    start_time: time
    end_time: time
    status: BookingStatus
    total_price: Decimal
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TimeSlotResponse(BaseModel):
    start_time: time
    end_time: time
    available: bool

    model_config = {"from_attributes": True}


class AvailabilityCheckResponse(BaseModel):
    court_id: int
    available: bool


class StatusCountResponse(BaseModel):
    status: BookingStatus
    count: int
