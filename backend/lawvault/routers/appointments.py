from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from lawvault.database import get_db
from lawvault.deps import get_appointment_service
from lawvault.schemas.appointment import AppointmentCreate, AppointmentResponse
from lawvault.services.appointment_service import AppointmentService

router = APIRouter()


@router.post("", response_model=AppointmentResponse, status_code=201)
async def book_appointment(
    data: AppointmentCreate,
    db: AsyncSession = Depends(get_db),
    appointments: AppointmentService = Depends(get_appointment_service),
):
    appointment = await appointments.book(data, db)
    return AppointmentResponse.model_validate(appointment)


@router.get("", response_model=list[AppointmentResponse])
async def list_appointments(
    db: AsyncSession = Depends(get_db),
    appointments: AppointmentService = Depends(get_appointment_service),
):
    return [AppointmentResponse.model_validate(a) for a in await appointments.list_all(db)]
