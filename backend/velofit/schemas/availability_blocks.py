# backend/velofit/schemas/availability_blocks.py

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, field_validator

from .datetimes import local_naive


class AvailabilityBlockCreate(BaseModel):
    store_id: int
    technician_id: Optional[int] = None

    start_datetime: datetime
    end_datetime: datetime

    reason: Optional[str] = None
    block_type: Literal["maintenance", "holiday", "training", "other"] = "other"

    model_config = {"from_attributes": True}

    @field_validator("start_datetime", "end_datetime")
    @classmethod
    def _naive_bounds(cls, value: datetime) -> datetime:
        return local_naive(value)


class AvailabilityBlockRead(BaseModel):
    id: int

    store_id: int
    technician_id: Optional[int] = None

    start_datetime: datetime
    end_datetime: datetime

    reason: Optional[str] = None
    block_type: str

    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
