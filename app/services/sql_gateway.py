# app/services/sql_gateway.py
"""
FleetGateway backed by the local database (DATA_BACKEND=sql).

Implements in-process what the remote stored procedures do: trip/log ID
generation, trip stage guards (via trip_lifecycle), vehicle and driver side
effects, and the per-vehicle financial rollup. Identity comes from verifying
the bearer JWT with the project secret; `sub` is the user id.

Session calls are synchronous, so they block the event loop; concurrent
gateway calls (the dashboard counts) run one after another in this backend.
"""

import math
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

import jwt
from sqlalchemy import Integer, cast, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import Settings
from app.exceptions import RemoteOperationError
from app.models._columns import as_utc, utcnow
from app.models.driver import Driver
from app.models.expense import Expense
from app.models.fuel_entry import FuelEntry
from app.models.maintenance_log import MaintenanceLog
from app.models.profile import Profile
from app.models.trip import Trip
from app.models.vehicle import Vehicle
from app.schemas.enums import DriverStatus, MaintenanceStatus, TripStage, VehicleStatus
from app.schemas.expense import ExpenseCreate
from app.schemas.fuel import FuelCreate
from app.schemas.maintenance import MaintenanceCreate
from app.schemas.trip import TripCreate
from app.services.fleet_gateway import (
    DRIVERS, EXPENSES, FUEL_ENTRIES, MAINTENANCE_LOGS, PROFILES, TRIPS, VEHICLES,
    FleetGateway,
)
from app.services.trip_lifecycle import advance
from app.utils.logger import get_logger

logger = get_logger(__name__)

CLOSED_MAINTENANCE = (MaintenanceStatus.COMPLETED.value, MaintenanceStatus.CANCELLED.value)

_COUNTABLE = {
    PROFILES: Profile,
    VEHICLES: Vehicle,
    DRIVERS: Driver,
    TRIPS: Trip,
    MAINTENANCE_LOGS: MaintenanceLog,
    FUEL_ENTRIES: FuelEntry,
    EXPENSES: Expense,
}


def to_dict(row) -> dict:
    """Column values of an ORM row, dates rendered the way the REST API sends them."""
    out = {}
    for column in row.__table__.columns:
        value = getattr(row, column.name)
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        out[column.name] = value
    return out


def _plain(values: dict) -> dict:
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in values.items()}


class SqlFleetGateway(FleetGateway):
    def __init__(self, db: Session, access_token: str, settings: Settings):
        self.db = db
        self.access_token = access_token
        self.settings = settings
        self.user_id: Optional[str] = None

    # ── Identity ──────────────────────────────────────────────────────────
    async def get_user_id(self) -> Optional[str]:
        options = {} if self.settings.JWT_AUDIENCE else {"verify_aud": False}
        try:
            claims = jwt.decode(
                self.access_token,
                self.settings.JWT_SECRET,
                algorithms=[self.settings.JWT_ALGORITHM],
                audience=self.settings.JWT_AUDIENCE,
                options=options,
            )
        except jwt.PyJWTError as e:
            logger.info(f"Token rejected: {e}")
            return None
        self.user_id = claims.get("sub")
        return self.user_id

    async def get_profile_role(self, user_id: str) -> str:
        profile = self.db.get(Profile, user_id)
        if not profile:
            raise RemoteOperationError(f"No profile for user {user_id}")
        return profile.role

    # ── Lookups ───────────────────────────────────────────────────────────
    def _find_vehicle(self, ref: str) -> Vehicle:
        vehicle = (
            self.db.query(Vehicle)
            .filter(or_(Vehicle.id == ref, Vehicle.vehicle_id == ref))
            .first()
        )
        if not vehicle:
            raise RemoteOperationError(f"Vehicle {ref} not found")
        return vehicle

    def _find_driver(self, ref: str) -> Driver:
        driver = self.db.get(Driver, ref)
        if not driver:
            raise RemoteOperationError(f"Driver {ref} not found")
        return driver

    def _find_trip(self, ref: str) -> Trip:
        trip = self.db.query(Trip).filter(or_(Trip.id == ref, Trip.trip_id == ref)).first()
        if not trip:
            raise RemoteOperationError(f"Trip {ref} not found")
        return trip

    def _next_code(self, code_column, prefix: str) -> str:
        # numeric max: "TRP-10000" sorts before "TRP-9999" as text
        suffix = cast(func.substr(code_column, len(prefix) + 2), Integer)
        highest = (
            self.db.query(func.max(suffix))
            .filter(code_column.like(f"{prefix}-%"))
            .scalar()
        )
        return f"{prefix}-{(highest or 0) + 1:04d}"

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            message = str(getattr(e, "orig", None) or e)
            logger.warning(f"Commit rolled back: {message}")
            raise RemoteOperationError(message) from e

    # ── Vehicles ──────────────────────────────────────────────────────────
    async def list_vehicles(self) -> list[dict]:
        return [to_dict(v) for v in self.db.query(Vehicle).order_by(Vehicle.created_at.desc()).all()]

    async def create_vehicle(self, values: dict) -> dict:
        values = _plain(values)
        clash = self.db.query(Vehicle).filter(or_(
            Vehicle.vehicle_id == values["vehicle_id"],
            Vehicle.plate_number == values["plate_number"],
        )).first()
        if clash:
            raise RemoteOperationError(
                f"Vehicle {values['vehicle_id']} / plate {values['plate_number']} already registered"
            )
        vehicle = Vehicle(**values)
        self.db.add(vehicle)
        self._commit()
        self.db.refresh(vehicle)
        logger.info(f"Vehicle {vehicle.vehicle_id} registered")
        return to_dict(vehicle)

    async def update_vehicle(self, vehicle_id: str, values: dict) -> dict:
        vehicle = self._find_vehicle(vehicle_id)
        for key, value in _plain(values).items():
            setattr(vehicle, key, value)
        self._commit()
        self.db.refresh(vehicle)
        return to_dict(vehicle)

    async def delete_vehicle(self, vehicle_id: str) -> None:
        vehicle = self._find_vehicle(vehicle_id)
        if vehicle.status == VehicleStatus.ON_TRIP.value:
            raise RemoteOperationError(f"Vehicle {vehicle.vehicle_id} is on a trip")
        self.db.delete(vehicle)
        self._commit()
        logger.info(f"Vehicle {vehicle.vehicle_id} removed")

    # ── Drivers ───────────────────────────────────────────────────────────
    async def list_drivers(self) -> list[dict]:
        return [to_dict(d) for d in self.db.query(Driver).order_by(Driver.created_at.desc()).all()]

    async def create_driver(self, values: dict) -> dict:
        driver = Driver(**_plain(values))
        self.db.add(driver)
        self._commit()
        self.db.refresh(driver)
        return to_dict(driver)

    async def update_driver_status(self, driver_id: str, status: DriverStatus) -> None:
        driver = self._find_driver(driver_id)
        driver.status = status.value
        self._commit()
        logger.info(f"Driver {driver.name} → {status.value}")

    # ── Trips ─────────────────────────────────────────────────────────────
    def _trip_details_query(self):
        return (
            self.db.query(Trip, Vehicle, Driver)
            .join(Vehicle, Trip.vehicle_id == Vehicle.id)
            .join(Driver, Trip.driver_id == Driver.id)
        )

    @staticmethod
    def _trip_details(trip: Trip, vehicle: Vehicle, driver: Driver) -> dict:
        row = to_dict(trip)
        row.update({
            "vehicle_code": vehicle.vehicle_id,
            "vehicle_name": vehicle.name,
            "plate_number": vehicle.plate_number,
            "driver_name": driver.name,
            "driver_license": driver.license_number,
        })
        return row

    async def list_trips(self) -> list[dict]:
        rows = self._trip_details_query().order_by(Trip.created_at.desc()).all()
        return [self._trip_details(t, v, d) for t, v, d in rows]

    async def get_trip(self, trip_id: str) -> dict:
        row = self._trip_details_query().filter(or_(Trip.id == trip_id, Trip.trip_id == trip_id)).first()
        if not row:
            raise RemoteOperationError(f"Trip {trip_id} not found")
        return self._trip_details(*row)

    async def create_trip(self, trip: TripCreate) -> Any:
        vehicle = self._find_vehicle(trip.vehicle_id)
        driver = self._find_driver(trip.driver_id)
        if trip.cargo_weight_kg > vehicle.max_load_kg:
            raise RemoteOperationError(
                f"Cargo weight {trip.cargo_weight_kg:g} kg exceeds capacity of "
                f"{vehicle.vehicle_id} ({vehicle.max_load_kg:g} kg)"
            )
        record = Trip(
            trip_id=self._next_code(Trip.trip_id, "TRP"),
            vehicle_id=vehicle.id,
            driver_id=driver.id,
            origin=trip.origin,
            destination=trip.destination,
            cargo_weight_kg=trip.cargo_weight_kg,
            region=trip.region,
            revenue=trip.revenue,
            stage=TripStage.DRAFT.value,
            created_by=self.user_id,
        )
        self.db.add(record)
        self._commit()
        logger.info(f"Trip {record.trip_id} created: {record.origin} → {record.destination}")
        return record.trip_id

    async def dispatch_trip(self, trip_id: str) -> None:
        trip = self._find_trip(trip_id)
        target = advance(TripStage(trip.stage), "dispatch")
        vehicle = self.db.get(Vehicle, trip.vehicle_id)
        driver = self.db.get(Driver, trip.driver_id)
        if vehicle.status != VehicleStatus.AVAILABLE.value:
            raise RemoteOperationError(f"Vehicle {vehicle.vehicle_id} is not available ({vehicle.status})")
        if driver.status != DriverStatus.ACTIVE.value:
            raise RemoteOperationError(f"Driver {driver.name} is not active ({driver.status})")
        if driver.license_expiry and driver.license_expiry < date.today():
            raise RemoteOperationError(f"Driver {driver.name} has an expired license")

        vehicle.status = VehicleStatus.ON_TRIP.value
        vehicle.current_driver_id = driver.id
        trip.stage = target.value
        self._commit()
        logger.info(f"Trip {trip.trip_id} dispatched with {vehicle.vehicle_id}")

    async def start_trip(self, trip_id: str) -> None:
        trip = self._find_trip(trip_id)
        trip.stage = advance(TripStage(trip.stage), "start").value
        trip.started_at = utcnow()
        self._commit()

    async def complete_trip(self, trip_id: str, end_odometer_km: float) -> None:
        trip = self._find_trip(trip_id)
        target = advance(TripStage(trip.stage), "complete")
        vehicle = self.db.get(Vehicle, trip.vehicle_id)
        if end_odometer_km < vehicle.odometer_km:
            raise RemoteOperationError(
                f"end_odometer_km {end_odometer_km:g} is below current odometer {vehicle.odometer_km:g}"
            )

        now = utcnow()
        elapsed = now - as_utc(trip.started_at or trip.created_at)
        trip.trip_duration_days = max(1, math.ceil(elapsed.total_seconds() / 86400))
        trip.actual_fuel_cost = (
            self.db.query(func.coalesce(func.sum(FuelEntry.cost), 0))
            .filter(FuelEntry.trip_id == trip.id)
            .scalar()
        )
        trip.completed_at = now
        trip.stage = target.value
        vehicle.odometer_km = end_odometer_km
        vehicle.status = VehicleStatus.AVAILABLE.value
        vehicle.current_driver_id = None
        self._commit()
        logger.info(f"Trip {trip.trip_id} completed at {end_odometer_km:g} km")

    async def cancel_trip(self, trip_id: str) -> None:
        trip = self._find_trip(trip_id)
        previous = TripStage(trip.stage)
        trip.stage = advance(previous, "cancel").value
        if previous == TripStage.DISPATCHED:
            vehicle = self.db.get(Vehicle, trip.vehicle_id)
            vehicle.status = VehicleStatus.AVAILABLE.value
            vehicle.current_driver_id = None
        self._commit()
        logger.info(f"Trip {trip.trip_id} cancelled from {previous.value}")

    # ── Maintenance / fuel / expenses ─────────────────────────────────────
    async def list_maintenance(self) -> list[dict]:
        logs = self.db.query(MaintenanceLog).order_by(MaintenanceLog.service_date.desc()).all()
        return [to_dict(m) for m in logs]

    def _find_maintenance(self, ref: str) -> MaintenanceLog:
        log = (
            self.db.query(MaintenanceLog)
            .filter(or_(MaintenanceLog.id == ref, MaintenanceLog.log_id == ref))
            .first()
        )
        if not log:
            raise RemoteOperationError(f"Maintenance log {ref} not found")
        return log

    def _send_to_shop(self, vehicle: Vehicle):
        if vehicle.status == VehicleStatus.ON_TRIP.value:
            raise RemoteOperationError(f"Vehicle {vehicle.vehicle_id} is on a trip")
        vehicle.status = VehicleStatus.IN_SHOP.value

    async def log_maintenance(self, log: MaintenanceCreate) -> Any:
        vehicle = self._find_vehicle(log.vehicle_id)
        status = log.status or MaintenanceStatus.IN_PROGRESS
        if status == MaintenanceStatus.IN_PROGRESS:
            self._send_to_shop(vehicle)
        record = MaintenanceLog(
            log_id=self._next_code(MaintenanceLog.log_id, "MNT"),
            vehicle_id=vehicle.id,
            service_type=log.type,
            description=log.description,
            cost=log.cost,
            service_date=log.service_date or date.today(),
            status=status.value,
            odometer_at_service=vehicle.odometer_km,
            created_by=self.user_id,
        )
        self.db.add(record)
        self._commit()
        logger.info(f"Maintenance {record.log_id} logged as {status.value}; {vehicle.vehicle_id} is {vehicle.status}")
        return record.log_id

    async def update_maintenance_status(self, log_id: str, status: MaintenanceStatus) -> None:
        log = self._find_maintenance(log_id)
        if log.status in CLOSED_MAINTENANCE:
            raise RemoteOperationError(f"Maintenance {log.log_id} is already {log.status}")
        vehicle = self.db.get(Vehicle, log.vehicle_id)

        if status == MaintenanceStatus.IN_PROGRESS:
            self._send_to_shop(vehicle)
        elif status.value in CLOSED_MAINTENANCE and vehicle.status == VehicleStatus.IN_SHOP.value:
            still_open = (
                self.db.query(MaintenanceLog)
                .filter(
                    MaintenanceLog.vehicle_id == vehicle.id,
                    MaintenanceLog.id != log.id,
                    MaintenanceLog.status == MaintenanceStatus.IN_PROGRESS.value,
                )
                .count()
            )
            if not still_open:
                vehicle.status = VehicleStatus.AVAILABLE.value

        log.status = status.value
        self._commit()
        logger.info(f"Maintenance {log.log_id} → {status.value}; {vehicle.vehicle_id} is {vehicle.status}")

    async def list_fuel(self) -> list[dict]:
        entries = self.db.query(FuelEntry).order_by(FuelEntry.entry_date.desc()).all()
        return [to_dict(f) for f in entries]

    async def log_fuel(self, entry: FuelCreate) -> Any:
        vehicle = self._find_vehicle(entry.vehicle_id)
        trip = self._find_trip(entry.trip_id) if entry.trip_id else None
        if entry.liters <= 0:
            raise RemoteOperationError("liters must be greater than zero")
        record = FuelEntry(
            vehicle_id=vehicle.id,
            trip_id=trip.id if trip else None,
            liters=entry.liters,
            cost=entry.cost,
            price_per_liter=round(entry.cost / entry.liters, 2),
            entry_date=entry.log_date or date.today(),
            odometer_km=vehicle.odometer_km,
            created_by=self.user_id,
        )
        self.db.add(record)
        self._commit()
        return record.id

    async def list_expenses(self) -> list[dict]:
        expenses = self.db.query(Expense).order_by(Expense.expense_date.desc()).all()
        return [to_dict(e) for e in expenses]

    async def log_expense(self, expense: ExpenseCreate) -> Any:
        if expense.amount < 0:
            raise RemoteOperationError("amount cannot be negative")
        trip = self._find_trip(expense.trip_id) if expense.trip_id else None
        record = Expense(
            vehicle_id=trip.vehicle_id if trip else None,
            trip_id=trip.id if trip else None,
            category=expense.category.value,
            description=expense.description or "",
            amount=expense.amount,
            expense_date=expense.expense_date or date.today(),
            created_by=self.user_id,
        )
        self.db.add(record)
        self._commit()
        return record.id

    # ── Aggregation ───────────────────────────────────────────────────────
    def _sum_by_vehicle(self, vehicle_col, amount_col, *criteria) -> dict:
        q = self.db.query(vehicle_col, func.sum(amount_col)).filter(vehicle_col.isnot(None), *criteria)
        return {vehicle_id: total or 0 for vehicle_id, total in q.group_by(vehicle_col).all()}

    async def vehicle_financials(self) -> list[dict]:
        fuel = self._sum_by_vehicle(FuelEntry.vehicle_id, FuelEntry.cost)
        maintenance = self._sum_by_vehicle(
            MaintenanceLog.vehicle_id, MaintenanceLog.cost,
            MaintenanceLog.status != MaintenanceStatus.CANCELLED.value,
        )
        expenses = self._sum_by_vehicle(Expense.vehicle_id, Expense.amount)
        revenue = self._sum_by_vehicle(
            Trip.vehicle_id, Trip.revenue, Trip.stage == TripStage.COMPLETED.value,
        )

        report = []
        for v in self.db.query(Vehicle).order_by(Vehicle.vehicle_id).all():
            operational = fuel.get(v.id, 0) + maintenance.get(v.id, 0) + expenses.get(v.id, 0)
            report.append({
                "vehicle_id": v.vehicle_id,
                "name": v.name,
                "plate_number": v.plate_number,
                "revenue": round(revenue.get(v.id, 0), 2),
                "fuel_cost": round(fuel.get(v.id, 0), 2),
                "maintenance_cost": round(maintenance.get(v.id, 0), 2),
                "other_expenses": round(expenses.get(v.id, 0), 2),
                "operational_cost": round(operational, 2),
                "net_profit": round(revenue.get(v.id, 0) - operational, 2),
            })
        return report

    async def count(self, table: str, column: str, value: str) -> int:
        model = _COUNTABLE.get(table)
        if model is None or not hasattr(model, column):
            raise RemoteOperationError(f"Cannot count {table}.{column}")
        return (
            self.db.query(func.count())
            .select_from(model)
            .filter(getattr(model, column) == value)
            .scalar()
        )
