import logging
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from lawvault.exceptions import ConflictError, ValidationError
from lawvault.models.appointment import Appointment, make_slot_key
from lawvault.schemas.appointment import AppointmentCreate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "phone", "date", "time")


class AppointmentService:
    def __init__(self, enforce_unique_slots: bool = True):
        self.enforce_unique_slots = enforce_unique_slots

    async def is_slot_taken(self, date: str, time: str, db: AsyncSession) -> bool:
        result = await db.execute(
            select(Appointment.id).where(Appointment.date == date, Appointment.time == time).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def book(self, data: AppointmentCreate, db: AsyncSession) -> Appointment:
        fields = data.model_dump()
        missing = [f for f in REQUIRED_FIELDS if not (fields.get(f) or "").strip()]
        if missing:
            raise ValidationError("Please provide all required fields: " + ", ".join(missing))

        date = data.date.strip()
        time = data.time.strip()

        slot_key = None
        if self.enforce_unique_slots:
            if await self.is_slot_taken(date, time, db):
                logger.info("Slot %s %s already booked", date, time)
                raise ConflictError("This time slot is already booked")
            slot_key = make_slot_key(date, time)

        appointment = Appointment(
            name=data.name.strip(),
            email=data.email.strip(),
            phone=data.phone.strip(),
            date=date,
            time=time,
            message=data.message or "",
            slot_key=slot_key,
        )
        db.add(appointment)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            logger.info("Slot %s %s taken by a concurrent booking", date, time)
            raise ConflictError("This time slot is already booked")
        await db.refresh(appointment)
        await db.commit()

        logger.info("Appointment booked: id=%s slot=%s %s", appointment.id, date, time)
        return appointment

    async def list_all(self, db: AsyncSession) -> list[Appointment]:
        result = await db.execute(select(Appointment).order_by(Appointment.created_at, Appointment.id))
        return list(result.scalars().all())
