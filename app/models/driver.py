# app/models/driver.py
from sqlalchemy import Column, Date, Float, String
from app.database import Base
from app.models._columns import created_at, updated_at, uuid_pk


class Driver(Base):
    __tablename__ = "drivers"

    id = uuid_pk()
    name = Column(String(200), nullable=False)
    license_number = Column(String(100))
    license_expiry = Column(Date)
    phone = Column(String(50))
    email = Column(String(255))
    completion_rate = Column(Float, default=0, nullable=False)
    safety_score = Column(Float, default=100, nullable=False)
    status = Column(String(20), default="ACTIVE", nullable=False, index=True)
    created_at = created_at()
    updated_at = updated_at()

    def __repr__(self):
        return f"<Driver {self.name} status={self.status}>"
