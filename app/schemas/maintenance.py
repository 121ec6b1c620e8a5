# app/schemas/maintenance.py
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, model_validator

from app.schemas.enums import MaintenanceStatus, values_of
from app.schemas.validation import drop_nulls, ensure_object, require_one_of, require_present


class MaintenanceCreate(BaseModel):
    vehicle_id: str
    type: str                           # service type, e.g. "Oil Change"
    description: Optional[str] = None
    service_date: Optional[date] = None
    cost: float = 0
    status: Optional[MaintenanceStatus] = None  # IN_PROGRESS when omitted

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        data = ensure_object(data)
        require_present(data, "vehicle_id", "type", message="vehicle_id and type are required")
        if data.get("status") is not None:
            require_one_of(data, "status", values_of(MaintenanceStatus))
        return drop_nulls(data, "cost")


class MaintenanceStatusUpdate(BaseModel):
    status: MaintenanceStatus

    @model_validator(mode="before")
    @classmethod
    def check_status(cls, data: Any) -> Any:
        data = ensure_object(data)
        require_present(data, "status", message="status is required")
        require_one_of(data, "status", values_of(MaintenanceStatus))
        return data
