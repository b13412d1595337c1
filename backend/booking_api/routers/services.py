# backend/booking_api/routers/services.py
# Public catalog only: creating/editing services is an admin concern

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.tables import Services as DBServices
from ..schemas.services import ServiceListItem, ServiceRead

router = APIRouter(prefix="/services", tags=["services"])

CATALOG_CACHE_CONTROL = "public, max-age=60"


@router.get("/", response_model=list[ServiceListItem])
def list_services(response: Response, db: Session = Depends(get_db)):
    """Available services, unnamed ones last."""
    response.headers["Cache-Control"] = CATALOG_CACHE_CONTROL
    return (
        db.query(DBServices)
        .filter(DBServices.availability == 1)
        .order_by(DBServices.name.is_(None), DBServices.name, DBServices.id)
        .all()
    )


@router.get("/{id}", response_model=ServiceRead)
def get_service(id: int, db: Session = Depends(get_db)):
    if id <= 0:
        raise HTTPException(status_code=400, detail="Invalid ID")

    obj = db.get(DBServices, id)
    # Unavailable services are indistinguishable from missing ones
    if not obj or obj.availability != 1:
        raise HTTPException(status_code=404, detail="Not found")
    return obj
