from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import DeclarativeBase


def local_now() -> datetime:
    # Single implicit local time zone, stored naive
    return datetime.now()


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at = Column(DateTime, nullable=False, default=local_now)
    updated_at = Column(DateTime, nullable=False, default=local_now, onupdate=local_now)

    def touch(self) -> None:
        self.updated_at = local_now()
