# app/routers/drivers.py
"""Drivers: open listing, safety-team status changes and onboarding."""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from app.auth.rbac import SAFETY, require_role
from app.dependencies import get_gateway
from app.schemas.driver import DriverCreate, DriverStatusUpdate
from app.schemas.validation import parse_body
from app.services.fleet_gateway import FleetGateway
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/drivers", summary="List drivers, newest first")
async def list_drivers(gateway: FleetGateway = Depends(get_gateway)):
    return await gateway.list_drivers()


@router.post(
    "/drivers",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(*SAFETY))],
    summary="Onboard a driver",
)
async def create_driver(payload: Any = Body(None), gateway: FleetGateway = Depends(get_gateway)):
    body = parse_body(DriverCreate, payload)
    return await gateway.create_driver(body.model_dump(exclude_none=True))


@router.patch(
    "/drivers/{driver_id}/status",
    dependencies=[Depends(require_role(*SAFETY))],
    summary="Change a driver's duty status",
)
async def update_driver_status(driver_id: str, payload: Any = Body(None),
                               gateway: FleetGateway = Depends(get_gateway)):
    body = parse_body(DriverStatusUpdate, payload)
    await gateway.update_driver_status(driver_id, body.status)
    logger.info(f"Driver {driver_id} status → {body.status.value}")
    return {"success": True}
