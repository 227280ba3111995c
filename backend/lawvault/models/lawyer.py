from sqlalchemy import Column, Integer, DateTime, JSON
from sqlalchemy.sql import func
from lawvault.database import Base


class Lawyer(Base):
    __tablename__ = "lawyers"

    id = Column(Integer, primary_key=True, index=True)
    # Free-form profile (name, specialty, ...), schema not enforced
    profile = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
