# backend/velofit/routers/availability_blocks.py
# PATCH = 405, DELETE = ALLOWED (hard)

from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import BlockNotFound, StoreNotFound, TechnicianNotFound
from ..models.generated import AvailabilityBlocks as DBAvailabilityBlocks
from ..schemas.availability_blocks import (
    AvailabilityBlockCreate,
    AvailabilityBlockRead,
)
from ..services.slots.intervals import Interval
from ..services.storage import SqlStorage

router = APIRouter(prefix="/availability_blocks", tags=["availability_blocks"])


@router.get("/", response_model=list[AvailabilityBlockRead])
def list_availability_blocks(store_id: int, db: Session = Depends(get_db)):
    return (
        db.query(DBAvailabilityBlocks)
        .filter(DBAvailabilityBlocks.store_id == store_id)
        .order_by(DBAvailabilityBlocks.start_datetime.desc())
        .all()
    )


@router.post(
    "/", response_model=AvailabilityBlockRead, status_code=status.HTTP_201_CREATED
)
def create_availability_block(
    data: AvailabilityBlockCreate,
    db: Session = Depends(get_db),
):
    Interval(data.start_datetime, data.end_datetime)

    storage = SqlStorage(db)
    if not storage.get_store(data.store_id):
        raise StoreNotFound()
    if data.technician_id is not None and not storage.get_technician(data.technician_id, data.store_id):
        raise TechnicianNotFound()

    obj = DBAvailabilityBlocks(**data.model_dump(), created_at=datetime.now())
    with storage.transaction():
        storage.add(obj)
    db.refresh(obj)
    return obj


@router.patch("/{id}")
def patch_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_availability_block(id: int, db: Session = Depends(get_db)):
    storage = SqlStorage(db)
    obj = storage.get_block(id)
    if not obj:
        raise BlockNotFound()
    with storage.transaction():
        storage.delete(obj)
