# app/routers/analytics.py
"""Finance analytics. All routes are limited to financial analysts and managers."""

from fastapi import APIRouter, Depends

from app.auth.rbac import FINANCE, require_role
from app.dependencies import get_gateway
from app.services.analytics_service import get_fuel_cost_by_month, get_operational_cost
from app.services.fleet_gateway import FleetGateway

router = APIRouter(dependencies=[Depends(require_role(*FINANCE))])


@router.get("/analytics/vehicles", summary="Per-vehicle revenue, cost and profit")
async def vehicle_financials(gateway: FleetGateway = Depends(get_gateway)):
    return await gateway.vehicle_financials()


@router.get("/analytics/fuel-monthly", summary="Fuel cost per month, last six months with data")
async def fuel_monthly(gateway: FleetGateway = Depends(get_gateway)):
    return await get_fuel_cost_by_month(gateway)


@router.get("/analytics/operational-cost", summary="Fleet-wide operational cost breakdown")
async def operational_cost(gateway: FleetGateway = Depends(get_gateway)):
    return await get_operational_cost(gateway)
