# backend/velofit/schemas/slots.py
"""
Pydantic schemas for slots API.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel


class TimeSlotRead(BaseModel):
    """A candidate appointment and whether it can be booked."""
    start_datetime: datetime
    end_datetime: datetime
    technician_id: Optional[int] = None
    technician_name: Optional[str] = None
    available: bool

    model_config = {"from_attributes": True}


class SlotsDayResponse(BaseModel):
    """Slots of a service at a store for one day."""
    date: date
    store_id: int
    service_id: int
    slots: list[TimeSlotRead]

    model_config = {"from_attributes": True}
