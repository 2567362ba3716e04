# backend/velofit/routers/bookings.py
# Bookings are never deleted: DELETE cancels

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_booking_db, get_db
from ..schemas.bookings import (
    BookingCancel,
    BookingCreate,
    BookingRead,
    BookingStatusUpdate,
    BookingUpdate,
)
from ..services import bookings as booking_service
from ..services.storage import SqlStorage

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("/", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_booking_db),
):
    return booking_service.create_booking(SqlStorage(db), data)


@router.get("/{token}", response_model=BookingRead)
def get_booking(token: str, db: Session = Depends(get_db)):
    return booking_service.get_booking_by_token(SqlStorage(db), token)


@router.put("/{token}", response_model=BookingRead)
def update_booking(
    token: str,
    data: BookingUpdate,
    db: Session = Depends(get_booking_db),
):
    return booking_service.update_booking(SqlStorage(db), token, data)


@router.delete("/{token}", response_model=BookingRead)
def cancel_booking(
    token: str,
    data: BookingCancel | None = None,
    db: Session = Depends(get_db),
):
    reason = data.cancellation_reason if data else None
    return booking_service.cancel_booking(SqlStorage(db), token, reason)


@router.patch("/admin/{id}/status", response_model=BookingRead)
def update_booking_status(
    id: int,
    data: BookingStatusUpdate,
    db: Session = Depends(get_db),
):
    return booking_service.update_booking_status(
        SqlStorage(db), id, data.status, data.internal_notes
    )
