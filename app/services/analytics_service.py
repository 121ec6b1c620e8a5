# app/services/analytics_service.py
"""
Cost rollups computed from the fuel, maintenance and expense records.
Per-vehicle financials come straight from the gateway and are not touched here.
"""

import asyncio
from collections import defaultdict

from app.schemas.enums import MaintenanceStatus
from app.services.fleet_gateway import FleetGateway

MONTH_LABELS = ["JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"]
MONTHS_SHOWN = 6


def _amount(value) -> float:
    return float(value or 0)


def fuel_cost_by_month(entries: list[dict]) -> list[dict]:
    """Fuel cost summed per calendar month; the latest six months that have entries."""
    totals = defaultdict(float)
    for entry in entries:
        entry_date = entry.get("entry_date")
        if not entry_date:
            continue
        totals[str(entry_date)[:7]] += _amount(entry.get("cost"))   # "YYYY-MM"

    latest = sorted(totals.items())[-MONTHS_SHOWN:]
    return [
        {"month": MONTH_LABELS[int(key[5:7]) - 1], "value": round(value)}
        for key, value in latest
    ]


def operational_cost(fuel: list[dict], maintenance: list[dict], expenses: list[dict]) -> dict:
    fuel_total = sum(_amount(f.get("cost")) for f in fuel)
    maintenance_total = sum(
        _amount(m.get("cost")) for m in maintenance
        if m.get("status") == MaintenanceStatus.COMPLETED.value
    )
    expense_total = sum(_amount(e.get("amount")) for e in expenses)
    return {
        "fuel": round(fuel_total, 2),
        "maintenance": round(maintenance_total, 2),
        "expenses": round(expense_total, 2),
        "total": round(fuel_total + maintenance_total + expense_total, 2),
    }


async def get_fuel_cost_by_month(gateway: FleetGateway) -> list[dict]:
    return fuel_cost_by_month(await gateway.list_fuel())


async def get_operational_cost(gateway: FleetGateway) -> dict:
    fuel, maintenance, expenses = await asyncio.gather(
        gateway.list_fuel(),
        gateway.list_maintenance(),
        gateway.list_expenses(),
    )
    return operational_cost(fuel, maintenance, expenses)
