# app/routers/vehicles.py
"""Fleet vehicles. Listing is open to any authenticated caller; changes are manager-only."""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from app.auth.rbac import MANAGERS, require_role
from app.dependencies import get_gateway
from app.schemas.validation import parse_body
from app.schemas.vehicle import VehicleCreate, VehicleUpdate
from app.services.fleet_gateway import FleetGateway

router = APIRouter()


@router.get("/vehicles", summary="List vehicles, newest first")
async def list_vehicles(gateway: FleetGateway = Depends(get_gateway)):
    return await gateway.list_vehicles()


@router.post(
    "/vehicles",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(*MANAGERS))],
    summary="Register a vehicle",
)
async def create_vehicle(payload: Any = Body(None), gateway: FleetGateway = Depends(get_gateway)):
    body = parse_body(VehicleCreate, payload)
    return await gateway.create_vehicle(body.model_dump(exclude_none=True))


@router.patch(
    "/vehicles/{vehicle_id}",
    dependencies=[Depends(require_role(*MANAGERS))],
    summary="Update vehicle fields",
)
async def update_vehicle(vehicle_id: str, payload: Any = Body(None),
                         gateway: FleetGateway = Depends(get_gateway)):
    body = parse_body(VehicleUpdate, payload)
    return await gateway.update_vehicle(vehicle_id, body.model_dump(exclude_unset=True))


@router.delete(
    "/vehicles/{vehicle_id}",
    dependencies=[Depends(require_role(*MANAGERS))],
    summary="Remove a vehicle",
)
async def delete_vehicle(vehicle_id: str, gateway: FleetGateway = Depends(get_gateway)):
    await gateway.delete_vehicle(vehicle_id)
    return {"success": True}
