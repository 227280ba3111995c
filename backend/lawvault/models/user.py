from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from lawvault.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    # Always stored trimmed + lowercased
    email = Column(String(320), unique=True, nullable=False, index=True)
    password_hash = Column(String(100), nullable=False)
    photo = Column(String(500))  # "/uploads/<filename>"
    role = Column(String(50), nullable=False, default="client")
    gender = Column(String(20))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
