"""Vehicles, drivers, maintenance, fuel and expense routes."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import date

from app.exceptions import RemoteOperationError
from app.schemas.enums import DriverStatus, ExpenseCategory, MaintenanceStatus, VehicleStatus
from conftest import AUTH


class TestFuelRoutes:
    def test_string_liters_rejected(self, client, gateway):
        resp = client.post("/api/fuel", headers=AUTH, json={"vehicle_id": "v1", "liters": "50", "cost": 3000})
        assert resp.status_code == 400
        assert resp.json() == {"error": "liters must be a number"}
        gateway.log_fuel.assert_not_called()

    def test_missing_vehicle(self, client, gateway):
        resp = client.post("/api/fuel", headers=AUTH, json={"liters": 50, "cost": 3000})
        assert resp.status_code == 400
        assert resp.json() == {"error": "vehicle_id is required"}

    def test_missing_cost(self, client, gateway):
        resp = client.post("/api/fuel", headers=AUTH, json={"vehicle_id": "v1", "liters": 50})
        assert resp.status_code == 400
        assert resp.json() == {"error": "cost must be a number"}

    def test_logged_fuel_returns_id(self, client, gateway):
        gateway.log_fuel.return_value = "fuel-42"
        body = {"vehicle_id": "v1", "liters": 50, "cost": 3000, "trip_id": "t1", "log_date": "2026-03-02"}
        resp = client.post("/api/fuel", headers=AUTH, json=body)
        assert resp.status_code == 201
        assert resp.json() == {"success": True, "fuel_log_id": "fuel-42"}

        entry = gateway.log_fuel.call_args.args[0]
        assert entry.liters == 50
        assert entry.trip_id == "t1"
        assert entry.log_date == date(2026, 3, 2)

    def test_list_fuel(self, client, gateway):
        gateway.list_fuel.return_value = [{"id": "f1", "cost": 120}]
        resp = client.get("/api/fuel", headers=AUTH)
        assert resp.status_code == 200
        assert resp.json() == [{"id": "f1", "cost": 120}]


class TestExpenseRoutes:
    def test_repair_is_stored_category_but_rejected_here(self, client, gateway):
        assert ExpenseCategory.REPAIR.value == "REPAIR"
        resp = client.post("/api/expenses", headers=AUTH, json={"category": "REPAIR", "amount": 100})
        assert resp.status_code == 400
        assert resp.json() == {"error": "category must be one of: MAINTENANCE, TOLL, PARKING, OTHER"}
        gateway.log_expense.assert_not_called()

    @pytest.mark.parametrize("category", [None, "", "toll", "FUEL", "INSURANCE"])
    def test_other_invalid_categories(self, client, gateway, category):
        resp = client.post("/api/expenses", headers=AUTH, json={"category": category, "amount": 10})
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("category must be one of")

    def test_amount_must_be_numeric(self, client, gateway):
        resp = client.post("/api/expenses", headers=AUTH, json={"category": "TOLL", "amount": "12"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "amount must be a number"}

    def test_logged_expense_returns_id(self, client, gateway):
        gateway.log_expense.return_value = "exp-9"
        body = {"category": "PARKING", "amount": 25.5, "trip_id": "t1", "description": "Airport"}
        resp = client.post("/api/expenses", headers=AUTH, json=body)
        assert resp.status_code == 201
        assert resp.json() == {"success": True, "expense_id": "exp-9"}

        expense = gateway.log_expense.call_args.args[0]
        assert expense.category is ExpenseCategory.PARKING
        assert expense.amount == 25.5
        assert expense.expense_date is None


class TestMaintenanceRoutes:
    @pytest.mark.parametrize("body", [{}, {"vehicle_id": "v1"}, {"type": "Oil Change"}])
    def test_requires_vehicle_and_type(self, client, gateway, body):
        resp = client.post("/api/maintenance", headers=AUTH, json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "vehicle_id and type are required"}

    def test_cost_defaults_to_zero(self, client, gateway):
        resp = client.post("/api/maintenance", headers=AUTH, json={"vehicle_id": "v1", "type": "Oil Change"})
        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        log = gateway.log_maintenance.call_args.args[0]
        assert log.cost == 0
        assert log.description is None
        assert log.service_date is None

    def test_remote_failure_is_forwarded(self, client, gateway):
        gateway.log_maintenance.side_effect = RemoteOperationError("Vehicle is on a trip")
        resp = client.post("/api/maintenance", headers=AUTH, json={"vehicle_id": "v1", "type": "Tyres"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Vehicle is on a trip"}

    def test_status_passed_through_on_create(self, client, gateway):
        body = {"vehicle_id": "v1", "type": "Oil Change", "cost": 500, "status": "COMPLETED"}
        resp = client.post("/api/maintenance", headers=AUTH, json=body)
        assert resp.status_code == 200
        assert gateway.log_maintenance.call_args.args[0].status is MaintenanceStatus.COMPLETED

    def test_unknown_status_on_create(self, client, gateway):
        body = {"vehicle_id": "v1", "type": "Oil Change", "status": "DONE"}
        resp = client.post("/api/maintenance", headers=AUTH, json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "status must be one of: SCHEDULED, IN_PROGRESS, COMPLETED, CANCELLED"}
        gateway.log_maintenance.assert_not_called()

    def test_status_update(self, client, gateway):
        resp = client.patch("/api/maintenance/MNT-0001/status", headers=AUTH, json={"status": "COMPLETED"})
        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        gateway.update_maintenance_status.assert_awaited_once_with("MNT-0001", MaintenanceStatus.COMPLETED)

    def test_status_update_requires_status(self, client, gateway):
        resp = client.patch("/api/maintenance/MNT-0001/status", headers=AUTH, json={})
        assert resp.status_code == 400
        assert resp.json() == {"error": "status is required"}
        gateway.update_maintenance_status.assert_not_called()


class TestDriverRoutes:
    def test_status_required(self, client, gateway):
        resp = client.patch("/api/drivers/d1/status", headers=AUTH, json={})
        assert resp.status_code == 400
        assert resp.json() == {"error": "status is required"}
        gateway.update_driver_status.assert_not_called()

    def test_status_outside_enum(self, client, gateway):
        resp = client.patch("/api/drivers/d1/status", headers=AUTH, json={"status": "ON_LEAVE"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "status must be one of: ACTIVE, INACTIVE, EXPIRED, SUSPENDED"}

    def test_status_update(self, client, gateway):
        resp = client.patch("/api/drivers/d1/status", headers=AUTH, json={"status": "SUSPENDED"})
        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        gateway.update_driver_status.assert_awaited_once_with("d1", DriverStatus.SUSPENDED)

    def test_create_requires_name(self, client, gateway):
        resp = client.post("/api/drivers", headers=AUTH, json={"license_number": "L-1"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "name is required"}

    def test_create_driver(self, client, gateway):
        gateway.create_driver.return_value = {"id": "d9", "name": "Omar", "status": "ACTIVE"}
        resp = client.post("/api/drivers", headers=AUTH,
                           json={"name": "Omar", "license_expiry": "2027-01-31"})
        assert resp.status_code == 201
        assert resp.json()["id"] == "d9"
        values = gateway.create_driver.call_args.args[0]
        assert values["license_expiry"] == date(2027, 1, 31)
        assert values["status"] is DriverStatus.ACTIVE
        assert "phone" not in values


class TestVehicleRoutes:
    def test_create_requires_identifiers(self, client, gateway):
        resp = client.post("/api/vehicles", headers=AUTH, json={"name": "Truck"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "vehicle_id, name, plate_number are required"}

    def test_negative_capacity_rejected(self, client, gateway):
        body = {"vehicle_id": "VH-1", "name": "Truck", "plate_number": "ABC-1", "max_load_kg": -5}
        resp = client.post("/api/vehicles", headers=AUTH, json=body)
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("max_load_kg")
        gateway.create_vehicle.assert_not_called()

    def test_create_vehicle(self, client, gateway):
        gateway.create_vehicle.return_value = {"id": "v1", "vehicle_id": "VH-1"}
        body = {"vehicle_id": "VH-1", "name": "Truck", "plate_number": "ABC-1", "max_load_kg": 5000}
        resp = client.post("/api/vehicles", headers=AUTH, json=body)
        assert resp.status_code == 201
        assert resp.json() == {"id": "v1", "vehicle_id": "VH-1"}
        values = gateway.create_vehicle.call_args.args[0]
        assert values["status"] is VehicleStatus.AVAILABLE
        assert "odometer_km" not in values

    def test_update_sends_only_given_fields(self, client, gateway):
        gateway.update_vehicle.return_value = {"id": "v1", "status": "IN SHOP"}
        resp = client.patch("/api/vehicles/v1", headers=AUTH,
                            json={"status": "IN SHOP", "current_driver_id": None})
        assert resp.status_code == 200
        gateway.update_vehicle.assert_awaited_once_with(
            "v1", {"status": VehicleStatus.IN_SHOP, "current_driver_id": None}
        )

    @pytest.mark.parametrize("field", ["name", "max_load_kg", "plate_number"])
    def test_update_cannot_clear_required_field(self, client, gateway, field):
        resp = client.patch("/api/vehicles/v1", headers=AUTH, json={field: None})
        assert resp.status_code == 400
        assert resp.json() == {"error": f"{field} cannot be null"}
        gateway.update_vehicle.assert_not_called()

    def test_update_rejects_unknown_status(self, client, gateway):
        resp = client.patch("/api/vehicles/v1", headers=AUTH, json={"status": "PARKED"})
        assert resp.status_code == 400
        gateway.update_vehicle.assert_not_called()

    def test_delete_vehicle(self, client, gateway):
        resp = client.delete("/api/vehicles/v1", headers=AUTH)
        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        gateway.delete_vehicle.assert_awaited_once_with("v1")
