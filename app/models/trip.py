# app/models/trip.py
"""
Trips. stage follows the lifecycle in app/services/trip_lifecycle.py.
trip_id is the human-facing code (TRP-0001); id is the row key.
"""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from app.database import Base
from app.models._columns import created_at, updated_at, uuid_pk


class Trip(Base):
    __tablename__ = "trips"

    id = uuid_pk()
    trip_id = Column(String(50), unique=True, nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    driver_id = Column(String(36), ForeignKey("drivers.id"), nullable=False)
    origin = Column(String(255), nullable=False)
    destination = Column(String(255), nullable=False)
    cargo_weight_kg = Column(Float, default=0, nullable=False)
    region = Column(String(100))
    revenue = Column(Float, default=0, nullable=False)
    estimated_fuel_cost = Column(Float, default=0, nullable=False)
    actual_fuel_cost = Column(Float)
    trip_duration_days = Column(Integer)
    stage = Column(String(20), default="DRAFT", nullable=False, index=True)
    started_at = Column(DateTime(timezone=True))
    completed_at = Column(DateTime(timezone=True))
    created_by = Column(String(36))
    created_at = created_at()
    updated_at = updated_at()

    def __repr__(self):
        return f"<Trip {self.trip_id} {self.origin}→{self.destination} stage={self.stage}>"
