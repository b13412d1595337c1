# backend/booking_api/schemas/services.py

from typing import Optional
from pydantic import BaseModel


class ServiceListItem(BaseModel):
    id: int
    name: Optional[str] = None
    description: Optional[str] = None
    price: float

    model_config = {"from_attributes": True}


class ServiceRead(ServiceListItem):
    availability: bool
