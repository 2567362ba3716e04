# backend/velofit/routers/services.py

from fastapi import APIRouter, Depends
from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.generated import Services as DBServices
from ..schemas.services import ServiceRead

router = APIRouter(prefix="/services", tags=["services"])


@router.get("/", response_model=list[ServiceRead])
def list_services(store_id: int | None = None, db: Session = Depends(get_db)):
    """Active services; with store_id, that store's services plus global ones."""
    query = db.query(DBServices).filter(DBServices.is_active == 1)
    if store_id is not None:
        query = query.filter(
            or_(DBServices.store_id == store_id, DBServices.store_id.is_(None))
        )
    return query.order_by(DBServices.name).all()
