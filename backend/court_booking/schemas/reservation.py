"""
Pydantic schemas for shared-slot reservations.
"""

from datetime import datetime

from pydantic import BaseModel, NaiveDatetime

from court_booking.models.reservation import ReservationStatus


class ReservationCreate(BaseModel):
    court_id: int
    # One implicit local zone; an offset would not match stored slots
    starts_at: NaiveDatetime


class ReservationResponse(BaseModel):
    id: int
    court_id: int
    starts_at: datetime
    status: ReservationStatus
    participant_ids: list[int]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
