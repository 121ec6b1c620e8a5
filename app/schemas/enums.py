# app/schemas/enums.py
"""Closed value sets for every status, stage and category column."""

from enum import Enum


class VehicleStatus(str, Enum):
    ON_TRIP = "ON TRIP"
    IN_SHOP = "IN SHOP"
    AVAILABLE = "AVAILABLE"
    COMPLETED = "COMPLETED"


class DriverStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    EXPIRED = "EXPIRED"
    SUSPENDED = "SUSPENDED"


class TripStage(str, Enum):
    DRAFT = "DRAFT"
    DISPATCHED = "DISPATCHED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class MaintenanceStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class ExpenseCategory(str, Enum):
    FUEL = "FUEL"
    MAINTENANCE = "MAINTENANCE"
    TOLL = "TOLL"
    PARKING = "PARKING"
    REPAIR = "REPAIR"
    INSURANCE = "INSURANCE"
    OTHER = "OTHER"


# The expenses endpoint accepts only this subset of the stored categories.
# FUEL, REPAIR and INSURANCE rows exist but cannot be logged through the API.
API_EXPENSE_CATEGORIES = (
    ExpenseCategory.MAINTENANCE,
    ExpenseCategory.TOLL,
    ExpenseCategory.PARKING,
    ExpenseCategory.OTHER,
)


def values_of(members) -> list[str]:
    return [m.value for m in members]
