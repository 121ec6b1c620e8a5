# app/schemas/fuel.py
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, model_validator

from app.schemas.validation import ensure_object, require_number, require_present


class FuelCreate(BaseModel):
    vehicle_id: str
    liters: float
    cost: float
    trip_id: Optional[str] = None
    log_date: Optional[date] = None

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        data = ensure_object(data)
        require_present(data, "vehicle_id")
        require_number(data, "liters")
        require_number(data, "cost")
        return data
