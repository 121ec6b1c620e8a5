# app/routers/exports.py
"""CSV downloads for the finance team."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.auth.rbac import FINANCE, require_role
from app.dependencies import get_gateway
from app.services.csv_exporter import to_csv
from app.services.fleet_gateway import FleetGateway

router = APIRouter(dependencies=[Depends(require_role(*FINANCE))])


def csv_attachment(rows: list[dict], filename: str) -> Response:
    return Response(
        content=to_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/exports/vehicles.csv", summary="Vehicle register as CSV")
async def export_vehicles(gateway: FleetGateway = Depends(get_gateway)):
    return csv_attachment(await gateway.list_vehicles(), "vehicles.csv")


@router.get("/exports/financials.csv", summary="Per-vehicle financials as CSV")
async def export_financials(gateway: FleetGateway = Depends(get_gateway)):
    return csv_attachment(await gateway.vehicle_financials(), "financials.csv")
