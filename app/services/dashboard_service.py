# app/services/dashboard_service.py
"""
Dashboard summary: four independent counts fetched concurrently.
A count that fails is reported as 0 and logged; the summary itself never fails.
"""

import asyncio

from app.schemas.enums import DriverStatus, TripStage, VehicleStatus
from app.services.fleet_gateway import DRIVERS, TRIPS, VEHICLES, FleetGateway
from app.utils.logger import get_logger

logger = get_logger(__name__)

# summary key → (table, column, value)
DASHBOARD_COUNTS = {
    "availableVehicles": (VEHICLES, "status", VehicleStatus.AVAILABLE.value),
    "availableDrivers": (DRIVERS, "status", DriverStatus.ACTIVE.value),
    "activeTrips": (TRIPS, "stage", TripStage.DISPATCHED.value),
    "pendingCargo": (TRIPS, "stage", TripStage.DRAFT.value),
}


async def get_dashboard_summary(gateway: FleetGateway) -> dict:
    keys = list(DASHBOARD_COUNTS)
    results = await asyncio.gather(
        *(gateway.count(*DASHBOARD_COUNTS[k]) for k in keys),
        return_exceptions=True,
    )

    summary = {}
    for key, result in zip(keys, results):
        if isinstance(result, Exception):
            logger.warning(f"Dashboard count {key} failed, reporting 0: {result}")
            summary[key] = 0
        else:
            summary[key] = result or 0
    return summary
