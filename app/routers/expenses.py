# app/routers/expenses.py
"""
Trip and vehicle expenses.
Only MAINTENANCE, TOLL, PARKING and OTHER can be logged here, although stored
rows may carry any ExpenseCategory.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from app.auth.rbac import FINANCE, require_role
from app.dependencies import get_gateway
from app.schemas.expense import ExpenseCreate
from app.schemas.validation import parse_body
from app.services.fleet_gateway import FleetGateway

router = APIRouter(dependencies=[Depends(require_role(*FINANCE))])


@router.get("/expenses", summary="List expenses, newest first")
async def list_expenses(gateway: FleetGateway = Depends(get_gateway)):
    return await gateway.list_expenses()


@router.post("/expenses", status_code=status.HTTP_201_CREATED, summary="Log an expense")
async def log_expense(payload: Any = Body(None), gateway: FleetGateway = Depends(get_gateway)):
    body = parse_body(ExpenseCreate, payload)
    expense_id = await gateway.log_expense(body)
    return {"success": True, "expense_id": expense_id}
