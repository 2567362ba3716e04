# backend/velofit/schemas/bookings.py

import json
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator

from .datetimes import local_naive


class BookingCreate(BaseModel):
    store_id: int
    service_id: int
    technician_id: Optional[int] = None

    start_datetime: datetime

    customer_firstname: str = Field(min_length=1, max_length=100)
    customer_lastname: str = Field(min_length=1, max_length=100)
    customer_email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=255)
    customer_phone: str = Field(pattern=r"^\+?[0-9 ().-]{6,20}$")
    customer_data: Optional[dict[str, Any]] = None

    # Reservation lock held by the submitting session, if any
    session_id: Optional[str] = None

    model_config = {"from_attributes": True}

    @field_validator("start_datetime")
    @classmethod
    def _naive_start(cls, value: datetime) -> datetime:
        return local_naive(value)


class BookingUpdate(BaseModel):
    start_datetime: Optional[datetime] = None

    customer_firstname: Optional[str] = Field(default=None, min_length=1, max_length=100)
    customer_lastname: Optional[str] = Field(default=None, min_length=1, max_length=100)
    customer_email: Optional[str] = Field(default=None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    customer_phone: Optional[str] = Field(default=None, pattern=r"^\+?[0-9 ().-]{6,20}$")
    customer_data: Optional[dict[str, Any]] = None

    session_id: Optional[str] = None

    model_config = {"from_attributes": True}

    @field_validator("start_datetime")
    @classmethod
    def _naive_start(cls, value: Optional[datetime]) -> Optional[datetime]:
        return local_naive(value)


class BookingCancel(BaseModel):
    cancellation_reason: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    status: str
    internal_notes: Optional[str] = None


class BookingRead(BaseModel):
    id: int
    booking_token: str

    store_id: int
    service_id: int
    technician_id: Optional[int] = None

    start_datetime: datetime
    end_datetime: datetime
    status: str

    customer_firstname: str
    customer_lastname: str
    customer_email: str
    customer_phone: str
    customer_data: dict[str, Any] = {}

    internal_notes: Optional[str] = None
    cancellation_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None

    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("customer_data", mode="before")
    @classmethod
    def _parse_customer_data(cls, value):
        if isinstance(value, str):
            return json.loads(value) if value else {}
        return value or {}
