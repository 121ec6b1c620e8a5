# app/routers/trips.py
"""
Trips and their lifecycle transitions.

  POST /trips                 create   (DRAFT)
  POST /trips/{id}/dispatch   DRAFT → DISPATCHED
  POST /trips/{id}/start      DISPATCHED → IN_PROGRESS
  POST /trips/{id}/complete   IN_PROGRESS → COMPLETED   body {end_odometer_km}
  POST /trips/{id}/cancel     DRAFT | DISPATCHED → CANCELLED

Whether a transition is legal is decided by the gateway, never here.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from app.auth.rbac import FLEET_OPS, require_role
from app.dependencies import get_gateway
from app.schemas.trip import TripComplete, TripCreate
from app.schemas.validation import parse_body
from app.services.fleet_gateway import FleetGateway

router = APIRouter()

dispatch_team = [Depends(require_role(*FLEET_OPS))]


@router.get("/trips", summary="List trips with vehicle and driver details")
async def list_trips(gateway: FleetGateway = Depends(get_gateway)):
    return await gateway.list_trips()


@router.get("/trips/{trip_id}", summary="Single trip with vehicle and driver details")
async def get_trip(trip_id: str, gateway: FleetGateway = Depends(get_gateway)):
    return await gateway.get_trip(trip_id)


@router.post("/trips", status_code=status.HTTP_201_CREATED, dependencies=dispatch_team,
             summary="Create a trip")
async def create_trip(payload: Any = Body(None), gateway: FleetGateway = Depends(get_gateway)):
    body = parse_body(TripCreate, payload)
    trip_id = await gateway.create_trip(body)
    return {"trip_id": trip_id}


@router.post("/trips/{trip_id}/dispatch", dependencies=dispatch_team, summary="Dispatch a draft trip")
async def dispatch_trip(trip_id: str, gateway: FleetGateway = Depends(get_gateway)):
    await gateway.dispatch_trip(trip_id)
    return {"success": True}


@router.post("/trips/{trip_id}/start", dependencies=dispatch_team, summary="Mark a dispatched trip as started")
async def start_trip(trip_id: str, gateway: FleetGateway = Depends(get_gateway)):
    await gateway.start_trip(trip_id)
    return {"success": True}


@router.post("/trips/{trip_id}/complete", dependencies=dispatch_team, summary="Complete a trip")
async def complete_trip(trip_id: str, payload: Any = Body(None),
                        gateway: FleetGateway = Depends(get_gateway)):
    body = parse_body(TripComplete, payload)
    await gateway.complete_trip(trip_id, body.end_odometer_km)
    return {"success": True}


@router.post("/trips/{trip_id}/cancel", dependencies=dispatch_team, summary="Cancel a trip")
async def cancel_trip(trip_id: str, gateway: FleetGateway = Depends(get_gateway)):
    await gateway.cancel_trip(trip_id)
    return {"success": True}
