# app/schemas/trip.py
from typing import Any, Optional

from pydantic import BaseModel, model_validator

from app.schemas.validation import drop_nulls, ensure_object, require_number, require_present


class TripCreate(BaseModel):
    vehicle_id: str
    driver_id: str
    origin: str
    destination: str
    cargo_weight_kg: float = 0
    region: Optional[str] = None
    revenue: float = 0

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        data = ensure_object(data)
        require_present(data, "vehicle_id", "driver_id", "origin", "destination",
                        message="vehicle_id, driver_id, origin, destination are required")
        return drop_nulls(data, "cargo_weight_kg", "revenue")


class TripComplete(BaseModel):
    end_odometer_km: float

    @model_validator(mode="before")
    @classmethod
    def check_odometer(cls, data: Any) -> Any:
        data = ensure_object(data)
        require_number(data, "end_odometer_km")
        return data
