# app/models/maintenance_log.py
from sqlalchemy import Column, Date, Float, ForeignKey, String, Text
from app.database import Base
from app.models._columns import created_at, updated_at, uuid_pk


class MaintenanceLog(Base):
    __tablename__ = "maintenance_logs"

    id = uuid_pk()
    log_id = Column(String(50), unique=True, nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    service_type = Column(String(100), nullable=False)
    description = Column(Text)
    cost = Column(Float, default=0, nullable=False)
    service_date = Column(Date, nullable=False)
    status = Column(String(20), default="SCHEDULED", nullable=False)
    next_service_date = Column(Date)
    odometer_at_service = Column(Float)
    created_by = Column(String(36))
    created_at = created_at()
    updated_at = updated_at()

    def __repr__(self):
        return f"<MaintenanceLog {self.log_id} {self.service_type} status={self.status}>"
