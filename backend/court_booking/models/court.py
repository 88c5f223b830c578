"""
Court model. Price is stored per hour; bookings multiply it by whole hours.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, Integer, Numeric, String

from court_booking.db.base import Base, TimestampMixin


class Court(Base, TimestampMixin):
    __tablename__ = "courts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(500), nullable=True)
    hourly_price = Column(Numeric(10, 2), nullable=False)
    # Inactive courts stay visible but cannot take shared-slot reservations
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("hourly_price > 0", name="check_court_hourly_price_positive"),
    )

    def __repr__(self) -> str:
        return f"<Court(id={self.id}, name={self.name}, price={self.hourly_price})>"
