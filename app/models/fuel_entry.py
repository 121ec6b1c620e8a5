# app/models/fuel_entry.py
from sqlalchemy import Column, Date, Float, ForeignKey, String, Text
from app.database import Base
from app.models._columns import created_at, uuid_pk


class FuelEntry(Base):
    __tablename__ = "fuel_entries"

    id = uuid_pk()
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    trip_id = Column(String(36), ForeignKey("trips.id"))
    liters = Column(Float, nullable=False)
    cost = Column(Float, nullable=False)
    price_per_liter = Column(Float, default=0, nullable=False)
    entry_date = Column(Date, nullable=False)
    odometer_km = Column(Float)
    station_name = Column(String(200))
    notes = Column(Text)
    created_by = Column(String(36))
    created_at = created_at()

    def __repr__(self):
        return f"<FuelEntry {self.vehicle_id} {self.liters}L cost={self.cost}>"
