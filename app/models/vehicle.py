# app/models/vehicle.py
"""Fleet vehicles. status is driven by trip and maintenance actions."""

from sqlalchemy import Column, Float, ForeignKey, String
from app.database import Base
from app.models._columns import created_at, updated_at, uuid_pk


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = uuid_pk()
    vehicle_id = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    model = Column(String(200))
    plate_number = Column(String(50), unique=True, nullable=False)
    max_load_kg = Column(Float, default=0, nullable=False)
    odometer_km = Column(Float, default=0, nullable=False)
    status = Column(String(20), default="AVAILABLE", nullable=False, index=True)
    current_driver_id = Column(String(36), ForeignKey("drivers.id", ondelete="SET NULL"))
    created_at = created_at()
    updated_at = updated_at()

    def __repr__(self):
        return f"<Vehicle {self.vehicle_id} plate={self.plate_number} status={self.status}>"
