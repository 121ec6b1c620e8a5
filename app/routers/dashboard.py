# app/routers/dashboard.py
from fastapi import APIRouter, Depends

from app.dependencies import get_gateway
from app.services.dashboard_service import get_dashboard_summary
from app.services.fleet_gateway import FleetGateway

router = APIRouter()


@router.get("/dashboard", summary="Fleet summary counts")
async def dashboard(gateway: FleetGateway = Depends(get_gateway)):
    """availableVehicles, availableDrivers, activeTrips, pendingCargo. Failed counts read 0."""
    return await get_dashboard_summary(gateway)
