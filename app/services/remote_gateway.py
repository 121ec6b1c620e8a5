# app/services/remote_gateway.py
"""
FleetGateway backed by the managed service.
Business rules (ID generation, stage guards, vehicle/driver side effects)
live in the remote stored procedures; this class only maps arguments.
"""

from datetime import date
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder

from app.schemas.enums import DriverStatus, MaintenanceStatus, VehicleStatus
from app.schemas.expense import ExpenseCreate
from app.schemas.fuel import FuelCreate
from app.schemas.maintenance import MaintenanceCreate
from app.schemas.trip import TripCreate
from app.services.fleet_gateway import (
    DRIVERS, EXPENSES, FUEL_ENTRIES, MAINTENANCE_LOGS, PROFILES, TRIP_DETAILS, VEHICLES,
    FleetGateway,
)
from app.services.remote_client import SupabaseClient


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


class RemoteFleetGateway(FleetGateway):
    def __init__(self, client: SupabaseClient):
        self.client = client

    # ── Identity ──────────────────────────────────────────────────────────
    async def get_user_id(self) -> Optional[str]:
        user = await self.client.get_user()
        return user.get("id") if user else None

    async def get_profile_role(self, user_id: str) -> str:
        profile = await self.client.select(PROFILES, "role", {"id": user_id}, single=True)
        return profile["role"]

    # ── Vehicles ──────────────────────────────────────────────────────────
    async def list_vehicles(self) -> list[dict]:
        return await self.client.select(VEHICLES, order="created_at.desc")

    async def create_vehicle(self, values: dict) -> dict:
        return await self.client.insert(VEHICLES, jsonable_encoder(values))

    async def update_vehicle(self, vehicle_id: str, values: dict) -> dict:
        return await self.client.update(VEHICLES, {"id": vehicle_id}, jsonable_encoder(values))

    async def delete_vehicle(self, vehicle_id: str) -> None:
        await self.client.delete(VEHICLES, {"id": vehicle_id})

    # ── Drivers ───────────────────────────────────────────────────────────
    async def list_drivers(self) -> list[dict]:
        return await self.client.select(DRIVERS, order="created_at.desc")

    async def create_driver(self, values: dict) -> dict:
        return await self.client.insert(DRIVERS, jsonable_encoder(values))

    async def update_driver_status(self, driver_id: str, status: DriverStatus) -> None:
        await self.client.rpc("update_driver_status", {
            "p_driver_id": driver_id,
            "p_status": status.value,
        })

    # ── Trips ─────────────────────────────────────────────────────────────
    async def list_trips(self) -> list[dict]:
        return await self.client.select(TRIP_DETAILS, order="created_at.desc")

    async def get_trip(self, trip_id: str) -> dict:
        return await self.client.select(TRIP_DETAILS, filters={"id": trip_id}, single=True)

    async def create_trip(self, trip: TripCreate) -> Any:
        return await self.client.rpc("create_trip", {
            "p_vehicle_id": trip.vehicle_id,
            "p_driver_id": trip.driver_id,
            "p_origin": trip.origin,
            "p_destination": trip.destination,
            "p_cargo_weight_kg": trip.cargo_weight_kg,
            "p_region": trip.region,
            "p_revenue": trip.revenue,
        })

    async def dispatch_trip(self, trip_id: str) -> None:
        await self.client.rpc("dispatch_trip", {"p_trip_id": trip_id})

    async def start_trip(self, trip_id: str) -> None:
        await self.client.rpc("start_trip", {"p_trip_id": trip_id})

    async def complete_trip(self, trip_id: str, end_odometer_km: float) -> None:
        await self.client.rpc("complete_trip", {
            "p_trip_id": trip_id,
            "p_end_odometer_km": end_odometer_km,
        })

    async def cancel_trip(self, trip_id: str) -> None:
        await self.client.rpc("cancel_trip", {"p_trip_id": trip_id})

    # ── Maintenance / fuel / expenses ─────────────────────────────────────
    async def list_maintenance(self) -> list[dict]:
        return await self.client.select(MAINTENANCE_LOGS, order="service_date.desc")

    async def log_maintenance(self, log: MaintenanceCreate) -> Any:
        params = {
            "p_vehicle_id": log.vehicle_id,
            "p_type": log.type,
            "p_description": log.description,
            "p_service_date": _iso(log.service_date),
            "p_cost": log.cost,
        }
        if log.status is not None:
            params["p_status"] = log.status.value
        return await self.client.rpc("log_maintenance", params)

    async def update_maintenance_status(self, log_id: str, status: MaintenanceStatus) -> None:
        log = await self.client.update(MAINTENANCE_LOGS, {"id": log_id}, {"status": status.value})
        if status not in (MaintenanceStatus.COMPLETED, MaintenanceStatus.CANCELLED):
            return
        vehicle = await self.client.select(VEHICLES, "id,status", {"id": log["vehicle_id"]}, single=True)
        if vehicle["status"] == VehicleStatus.IN_SHOP.value:
            await self.client.update(VEHICLES, {"id": vehicle["id"]}, {"status": VehicleStatus.AVAILABLE.value})

    async def list_fuel(self) -> list[dict]:
        return await self.client.select(FUEL_ENTRIES, order="entry_date.desc")

    async def log_fuel(self, entry: FuelCreate) -> Any:
        return await self.client.rpc("log_fuel", {
            "p_vehicle_id": entry.vehicle_id,
            "p_liters": entry.liters,
            "p_cost": entry.cost,
            "p_trip_id": entry.trip_id,
            "p_log_date": _iso(entry.log_date),
        })

    async def list_expenses(self) -> list[dict]:
        return await self.client.select(EXPENSES, order="expense_date.desc")

    async def log_expense(self, expense: ExpenseCreate) -> Any:
        return await self.client.rpc("log_expense", {
            "p_category": expense.category.value,
            "p_amount": expense.amount,
            "p_trip_id": expense.trip_id,
            "p_description": expense.description,
            "p_expense_date": _iso(expense.expense_date),
        })

    # ── Aggregation ───────────────────────────────────────────────────────
    async def vehicle_financials(self) -> list[dict]:
        return await self.client.rpc("get_vehicle_financials") or []

    async def count(self, table: str, column: str, value: str) -> int:
        return await self.client.count(table, {column: value})
