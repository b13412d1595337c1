# backend/booking_api/routers/appointments.py
# Public booking only: listing/editing appointments is an admin concern

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..schemas.appointments import (
    AppointmentCreate,
    AppointmentRead,
)
from ..services.availability import BookingConflict, InvalidInput
from ..services.availability.service import book_appointment, local_now

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.post("/", response_model=AppointmentRead, status_code=status.HTTP_201_CREATED)
def create_appointment(
    data: AppointmentCreate,
    db: Session = Depends(get_db),
):
    try:
        return book_appointment(db, data, now=local_now(settings.timezone))
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BookingConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
