from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class AppointmentCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    message: Optional[str] = None

    class Config:
        # Phone numbers often arrive as JSON numbers
        coerce_numbers_to_str = True


class AppointmentResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    date: str
    time: str
    message: str = ""
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
