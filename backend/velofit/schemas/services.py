# backend/velofit/schemas/services.py

from typing import Optional
from pydantic import BaseModel


class ServiceRead(BaseModel):
    id: int
    store_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    service_type: str
    duration_minutes: int
    price: float
    is_active: bool

    model_config = {"from_attributes": True}
