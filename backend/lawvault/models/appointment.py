from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from lawvault.database import Base


def make_slot_key(date: str, time: str) -> str:
    return f"{date}|{time}"


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(320), nullable=False)
    phone = Column(String(50), nullable=False)
    date = Column(String(20), nullable=False, index=True)
    time = Column(String(20), nullable=False)
    message = Column(Text, nullable=False, default="")
    # "<date>|<time>" while slot enforcement is on, NULL otherwise.
    # NULLs never collide, so the unique index only binds enforced bookings.
    slot_key = Column(String(50), unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
