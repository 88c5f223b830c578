"""
Shared-slot reservation: several players on one court at an exact start time.

Unlike Booking there is no end time or price. A slot is identified by
(court_id, starts_at) and only the CONFIRMED reservation for that pair counts.
"""

import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer, Table
from sqlalchemy.orm import relationship

from court_booking.db.base import Base, TimestampMixin

reservation_participants = Table(
    "reservation_participants",
    Base.metadata,
    Column("reservation_id", Integer, ForeignKey("reservations.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), primary_key=True),
)


class ReservationStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELED = "CANCELED"


class Reservation(Base, TimestampMixin):
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    court_id = Column(Integer, ForeignKey("courts.id"), nullable=False, index=True)
    starts_at = Column(DateTime, nullable=False)
    status = Column(
        Enum(ReservationStatus, name="reservation_status", native_enum=False, length=20),
        nullable=False,
        default=ReservationStatus.PENDING,
    )

    participants = relationship("User", secondary=reservation_participants, lazy="selectin")

    __table_args__ = (
        Index("ix_reservations_court_starts_at", "court_id", "starts_at"),
    )

    @property
    def participant_ids(self) -> list[int]:
        return sorted(user.id for user in self.participants)

    def has_participant(self, user_id: int) -> bool:
        return any(user.id == user_id for user in self.participants)

    def __repr__(self) -> str:
        return (
            f"<Reservation(id={self.id}, court={self.court_id}, starts_at={self.starts_at}, "
            f"players={len(self.participants)}, status={self.status})>"
        )
