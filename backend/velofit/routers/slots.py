# backend/velofit/routers/slots.py
"""
Slots API endpoints.

GET /slots/day - Slots of a service at a store for one day
"""

from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.slots import SlotsDayResponse, TimeSlotRead
from ..services.slots import get_available_slots, get_booking_config
from ..services.storage import SqlStorage


router = APIRouter(prefix="/slots", tags=["slots"])


@router.get("/day", response_model=SlotsDayResponse)
def get_slots_day(
    store_id: int,
    service_id: int,
    target_date: date = Query(..., alias="date"),
    technician_id: int | None = None,
    db: Session = Depends(get_db),
):
    """Get time slots for a service on a specific day; [] outside the booking window."""
    slots = get_available_slots(
        SqlStorage(db),
        store_id=store_id,
        service_id=service_id,
        target_date=target_date,
        config=get_booking_config(),
        technician_id=technician_id,
    )

    return SlotsDayResponse(
        date=target_date,
        store_id=store_id,
        service_id=service_id,
        slots=[TimeSlotRead.model_validate(slot) for slot in slots],
    )
