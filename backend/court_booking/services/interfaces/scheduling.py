"""
Scheduling core interface.
Lets a deployment choose between exclusive bookings and shared slots
without the routes knowing which rules apply.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession


class SchedulingCore(ABC):
    """
    Interface for court scheduling models.

    Implementations:
    - ExclusiveScheduler: one active booking per interval, priced per hour
    - SharedSlotScheduler: exact-timestamp slots shared up to a capacity
    """

    @abstractmethod
    async def create(self, db: AsyncSession, user_id: int, request: BaseModel) -> Any:
        """
        Take the requested court time for a user.

        Raises NotFound, InvalidTime, SchedulingConflict, CapacityExceeded or
        CourtUnavailable depending on the model's rules.
        """

    @abstractmethod
    async def check(self, db: AsyncSession, request: BaseModel) -> bool:
        """
        Report whether `create` would currently find room for the request.
        Advisory only: nothing is locked, so the answer can change at once.
        """

    @abstractmethod
    async def cancel(self, db: AsyncSession, record_id: int) -> Any:
        """Release the booking or reservation, keeping the record."""
