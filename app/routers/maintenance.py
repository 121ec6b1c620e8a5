# app/routers/maintenance.py
"""Maintenance logs. An in-progress service sends the vehicle to the shop; closing it brings the vehicle back."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from app.auth.rbac import MANAGERS, require_role
from app.dependencies import get_gateway
from app.schemas.maintenance import MaintenanceCreate, MaintenanceStatusUpdate
from app.schemas.validation import parse_body
from app.services.fleet_gateway import FleetGateway
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/maintenance", summary="List maintenance logs, latest service first")
async def list_maintenance(gateway: FleetGateway = Depends(get_gateway)):
    return await gateway.list_maintenance()


@router.post("/maintenance", dependencies=[Depends(require_role(*MANAGERS))],
             summary="Log a maintenance service")
async def log_maintenance(payload: Any = Body(None), gateway: FleetGateway = Depends(get_gateway)):
    body = parse_body(MaintenanceCreate, payload)
    await gateway.log_maintenance(body)
    return {"success": True}


@router.patch(
    "/maintenance/{log_id}/status",
    dependencies=[Depends(require_role(*MANAGERS))],
    summary="Move a maintenance log to a new status",
)
async def update_maintenance_status(log_id: str, payload: Any = Body(None),
                                    gateway: FleetGateway = Depends(get_gateway)):
    body = parse_body(MaintenanceStatusUpdate, payload)
    await gateway.update_maintenance_status(log_id, body.status)
    logger.info(f"Maintenance {log_id} status → {body.status.value}")
    return {"success": True}
