# app/services/fleet_gateway.py
"""
The one data-access seam every router talks to.

RemoteFleetGateway forwards to the managed service's tables and stored
procedures; SqlFleetGateway implements the same operations against the
local schema. A gateway lives for exactly one request.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from app.schemas.enums import DriverStatus, MaintenanceStatus
from app.schemas.expense import ExpenseCreate
from app.schemas.fuel import FuelCreate
from app.schemas.maintenance import MaintenanceCreate
from app.schemas.trip import TripCreate

# Table / view names shared by both backends
PROFILES = "profiles"
VEHICLES = "vehicles"
DRIVERS = "drivers"
TRIPS = "trips"
TRIP_DETAILS = "trip_details"
MAINTENANCE_LOGS = "maintenance_logs"
FUEL_ENTRIES = "fuel_entries"
EXPENSES = "expenses"


class FleetGateway(ABC):

    # ── Identity ──────────────────────────────────────────────────────────
    @abstractmethod
    async def get_user_id(self) -> Optional[str]:
        """User id behind the request's token, or None if it cannot be resolved."""

    @abstractmethod
    async def get_profile_role(self, user_id: str) -> str:
        """Raw role string from the caller's profile. Raises RemoteOperationError if absent."""

    # ── Vehicles ──────────────────────────────────────────────────────────
    @abstractmethod
    async def list_vehicles(self) -> list[dict]: ...

    @abstractmethod
    async def create_vehicle(self, values: dict) -> dict: ...

    @abstractmethod
    async def update_vehicle(self, vehicle_id: str, values: dict) -> dict: ...

    @abstractmethod
    async def delete_vehicle(self, vehicle_id: str) -> None: ...

    # ── Drivers ───────────────────────────────────────────────────────────
    @abstractmethod
    async def list_drivers(self) -> list[dict]: ...

    @abstractmethod
    async def create_driver(self, values: dict) -> dict: ...

    @abstractmethod
    async def update_driver_status(self, driver_id: str, status: DriverStatus) -> None: ...

    # ── Trips ─────────────────────────────────────────────────────────────
    @abstractmethod
    async def list_trips(self) -> list[dict]: ...

    @abstractmethod
    async def get_trip(self, trip_id: str) -> dict: ...

    @abstractmethod
    async def create_trip(self, trip: TripCreate) -> Any:
        """Returns the generated trip id."""

    @abstractmethod
    async def dispatch_trip(self, trip_id: str) -> None: ...

    @abstractmethod
    async def start_trip(self, trip_id: str) -> None: ...

    @abstractmethod
    async def complete_trip(self, trip_id: str, end_odometer_km: float) -> None: ...

    @abstractmethod
    async def cancel_trip(self, trip_id: str) -> None: ...

    # ── Maintenance / fuel / expenses ─────────────────────────────────────
    @abstractmethod
    async def list_maintenance(self) -> list[dict]: ...

    @abstractmethod
    async def log_maintenance(self, log: MaintenanceCreate) -> Any: ...

    @abstractmethod
    async def update_maintenance_status(self, log_id: str, status: MaintenanceStatus) -> None:
        """COMPLETED or CANCELLED releases a vehicle that is IN SHOP."""

    @abstractmethod
    async def list_fuel(self) -> list[dict]: ...

    @abstractmethod
    async def log_fuel(self, entry: FuelCreate) -> Any: ...

    @abstractmethod
    async def list_expenses(self) -> list[dict]: ...

    @abstractmethod
    async def log_expense(self, expense: ExpenseCreate) -> Any: ...

    # ── Aggregation ───────────────────────────────────────────────────────
    @abstractmethod
    async def vehicle_financials(self) -> list[dict]: ...

    @abstractmethod
    async def count(self, table: str, column: str, value: str) -> int:
        """Number of rows in `table` where `column` equals `value`."""
