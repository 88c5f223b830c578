"""
Pydantic schemas for court-related request/response validation.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class CourtCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    hourly_price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)


class CourtUpdate(CourtCreate):
    pass


class CourtStatusUpdate(BaseModel):
    is_active: bool


class CourtResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    hourly_price: Decimal
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
