# backend/velofit/schemas/stores.py

import json
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, field_validator


class StoreRead(BaseModel):
    id: int
    name: str

    city: str
    address: Optional[str] = None
    postal_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

    opening_hours: dict[str, Any]
    is_active: bool

    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_validator("opening_hours", mode="before")
    @classmethod
    def _parse_opening_hours(cls, value):
        if isinstance(value, str):
            try:
                return json.loads(value) if value else {}
            except json.JSONDecodeError:
                return {}
        return value
