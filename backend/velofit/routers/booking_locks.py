# backend/velofit/routers/booking_locks.py
# Soft holds taken by the booking form around slot selection

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import StoreNotFound
from ..schemas.booking_locks import BookingLockCreate, BookingLockRead
from ..services.slots import acquire_lock, get_booking_config, release_lock
from ..services.storage import SqlStorage

router = APIRouter(prefix="/booking_locks", tags=["booking_locks"])


@router.post("/", response_model=BookingLockRead, status_code=status.HTTP_201_CREATED)
def create_booking_lock(
    data: BookingLockCreate,
    db: Session = Depends(get_db),
):
    storage = SqlStorage(db)
    if not storage.get_store(data.store_id):
        raise StoreNotFound()

    return acquire_lock(
        storage,
        store_id=data.store_id,
        start_datetime=data.start_datetime,
        end_datetime=data.end_datetime,
        session_id=data.session_id,
        technician_id=data.technician_id,
        config=get_booking_config(),
    )


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking_lock(session_id: str, db: Session = Depends(get_db)):
    release_lock(SqlStorage(db), session_id)
