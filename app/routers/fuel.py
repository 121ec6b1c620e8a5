# app/routers/fuel.py
from typing import Any

from fastapi import APIRouter, Body, Depends, status

from app.auth.rbac import FINANCE, require_role
from app.dependencies import get_gateway
from app.schemas.fuel import FuelCreate
from app.schemas.validation import parse_body
from app.services.fleet_gateway import FleetGateway

router = APIRouter(dependencies=[Depends(require_role(*FINANCE))])


@router.get("/fuel", summary="List fuel entries, newest first")
async def list_fuel(gateway: FleetGateway = Depends(get_gateway)):
    return await gateway.list_fuel()


@router.post("/fuel", status_code=status.HTTP_201_CREATED, summary="Log a refuel")
async def log_fuel(payload: Any = Body(None), gateway: FleetGateway = Depends(get_gateway)):
    body = parse_body(FuelCreate, payload)
    fuel_log_id = await gateway.log_fuel(body)
    return {"success": True, "fuel_log_id": fuel_log_id}
