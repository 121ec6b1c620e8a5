# app/schemas/driver.py
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, model_validator

from app.schemas.enums import DriverStatus, values_of
from app.schemas.validation import ensure_object, require_one_of, require_present


class DriverStatusUpdate(BaseModel):
    status: DriverStatus

    @model_validator(mode="before")
    @classmethod
    def check_status(cls, data: Any) -> Any:
        data = ensure_object(data)
        require_present(data, "status", message="status is required")
        require_one_of(data, "status", values_of(DriverStatus))
        return data


class DriverCreate(BaseModel):
    name: str
    license_number: Optional[str] = None
    license_expiry: Optional[date] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    status: DriverStatus = DriverStatus.ACTIVE

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        data = ensure_object(data)
        require_present(data, "name")
        return data
