# app/schemas/vehicle.py
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from app.schemas.enums import VehicleStatus
from app.schemas.validation import ensure_object, reject_nulls, require_present


class VehicleCreate(BaseModel):
    vehicle_id: str                     # fleet code shown in the UI, e.g. VH-001
    name: str
    plate_number: str
    model: Optional[str] = None
    max_load_kg: Optional[float] = Field(None, ge=0)
    odometer_km: Optional[float] = Field(None, ge=0)
    status: VehicleStatus = VehicleStatus.AVAILABLE
    current_driver_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        data = ensure_object(data)
        require_present(data, "vehicle_id", "name", "plate_number",
                        message="vehicle_id, name, plate_number are required")
        return data


class VehicleUpdate(BaseModel):
    vehicle_id: Optional[str] = None
    name: Optional[str] = None
    plate_number: Optional[str] = None
    model: Optional[str] = None
    max_load_kg: Optional[float] = Field(None, ge=0)
    odometer_km: Optional[float] = Field(None, ge=0)
    status: Optional[VehicleStatus] = None
    current_driver_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def check_object(cls, data: Any) -> Any:
        data = ensure_object(data)
        reject_nulls(data, "vehicle_id", "name", "plate_number", "max_load_kg", "odometer_km", "status")
        return data
