# backend/velofit/schemas/booking_locks.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .datetimes import local_naive


class BookingLockCreate(BaseModel):
    store_id: int
    technician_id: Optional[int] = None

    start_datetime: datetime
    end_datetime: datetime

    session_id: str = Field(min_length=1, max_length=128)

    model_config = {"from_attributes": True}

    @field_validator("start_datetime", "end_datetime")
    @classmethod
    def _naive_bounds(cls, value: datetime) -> datetime:
        return local_naive(value)


class BookingLockRead(BaseModel):
    id: int

    store_id: int
    technician_id: Optional[int] = None

    start_datetime: datetime
    end_datetime: datetime

    session_id: str
    expires_at: datetime

    model_config = {"from_attributes": True}
