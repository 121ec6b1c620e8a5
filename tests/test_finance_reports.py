"""Analytics rollups and CSV export routes."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.services.analytics_service import fuel_cost_by_month, operational_cost
from conftest import AUTH

FINANCIALS = [
    {"vehicle_id": "VH-1", "name": "Truck, Large", "revenue": 9000, "operational_cost": 4200.5, "net_profit": 4799.5},
    {"vehicle_id": "VH-2", "name": "Van", "revenue": 0, "operational_cost": 0, "net_profit": 0},
]


class TestFuelCostByMonth:
    def test_sums_per_month_in_order(self):
        entries = [
            {"entry_date": "2026-02-10", "cost": 100.2},
            {"entry_date": "2026-01-05", "cost": 50},
            {"entry_date": "2026-02-20", "cost": 20.1},
        ]
        assert fuel_cost_by_month(entries) == [
            {"month": "JAN", "value": 50},
            {"month": "FEB", "value": 120},
        ]

    def test_keeps_latest_six_months(self):
        entries = [{"entry_date": f"2025-{m:02d}-01", "cost": m} for m in range(1, 13)]
        result = fuel_cost_by_month(entries)
        assert [r["month"] for r in result] == ["JUL", "AUG", "SEP", "OCT", "NOV", "DEC"]
        assert result[-1]["value"] == 12

    def test_year_boundary_sorts_chronologically(self):
        entries = [{"entry_date": "2026-01-03", "cost": 1}, {"entry_date": "2025-12-30", "cost": 2}]
        assert [r["month"] for r in fuel_cost_by_month(entries)] == ["DEC", "JAN"]

    def test_skips_undated_and_null_cost(self):
        entries = [{"entry_date": None, "cost": 5}, {"entry_date": "2026-03-01", "cost": None}]
        assert fuel_cost_by_month(entries) == [{"month": "MAR", "value": 0}]


class TestOperationalCost:
    def test_only_completed_maintenance_counts(self):
        fuel = [{"cost": 100}, {"cost": 50.25}]
        maintenance = [
            {"cost": 300, "status": "COMPLETED"},
            {"cost": 999, "status": "IN_PROGRESS"},
            {"cost": None, "status": "COMPLETED"},
        ]
        expenses = [{"amount": 20}, {"amount": None}]
        assert operational_cost(fuel, maintenance, expenses) == {
            "fuel": 150.25, "maintenance": 300.0, "expenses": 20.0, "total": 470.25,
        }

    def test_empty_records(self):
        assert operational_cost([], [], []) == {"fuel": 0, "maintenance": 0, "expenses": 0, "total": 0}


class TestAnalyticsRoutes:
    def test_vehicle_financials_passthrough(self, client, gateway):
        gateway.vehicle_financials.return_value = FINANCIALS
        resp = client.get("/api/analytics/vehicles", headers=AUTH)
        assert resp.status_code == 200
        assert resp.json() == FINANCIALS

    def test_fuel_monthly(self, client, gateway):
        gateway.list_fuel.return_value = [{"entry_date": "2026-04-01", "cost": 80}]
        resp = client.get("/api/analytics/fuel-monthly", headers=AUTH)
        assert resp.json() == [{"month": "APR", "value": 80}]

    def test_operational_cost(self, client, gateway):
        gateway.list_fuel.return_value = [{"cost": 10}]
        gateway.list_maintenance.return_value = [{"cost": 5, "status": "COMPLETED"}]
        gateway.list_expenses.return_value = [{"amount": 1}]
        resp = client.get("/api/analytics/operational-cost", headers=AUTH)
        assert resp.json() == {"fuel": 10, "maintenance": 5, "expenses": 1, "total": 16}


class TestExportRoutes:
    def test_financials_csv_attachment(self, client, gateway):
        gateway.vehicle_financials.return_value = FINANCIALS
        resp = client.get("/api/exports/financials.csv", headers=AUTH)
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.headers["content-disposition"] == 'attachment; filename="financials.csv"'
        assert resp.text == (
            "vehicle_id,name,revenue,operational_cost,net_profit\n"
            'VH-1,"Truck, Large",9000,4200.5,4799.5\n'
            "VH-2,Van,0,0,0"
        )

    def test_vehicles_csv_attachment(self, client, gateway):
        gateway.list_vehicles.return_value = [{"vehicle_id": "VH-1", "status": "ON TRIP"}]
        resp = client.get("/api/exports/vehicles.csv", headers=AUTH)
        assert resp.headers["content-disposition"] == 'attachment; filename="vehicles.csv"'
        assert resp.text == "vehicle_id,status\nVH-1,ON TRIP"

    def test_empty_export(self, client, gateway):
        gateway.list_vehicles.return_value = []
        resp = client.get("/api/exports/vehicles.csv", headers=AUTH)
        assert resp.status_code == 200
        assert resp.text == ""
