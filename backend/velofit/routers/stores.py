# backend/velofit/routers/stores.py
# Read-only: stores are edited from the admin tools

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import StoreNotFound
from ..models.generated import Stores as DBStores
from ..schemas.stores import StoreRead

router = APIRouter(prefix="/stores", tags=["stores"])


@router.get("/", response_model=list[StoreRead])
def list_stores(db: Session = Depends(get_db)):
    return (
        db.query(DBStores)
        .filter(DBStores.is_active == 1)
        .order_by(DBStores.name)
        .all()
    )


@router.get("/{id}", response_model=StoreRead)
def get_store(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBStores, id)
    if not obj or not obj.is_active:
        raise StoreNotFound()
    return obj
