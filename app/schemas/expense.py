# app/schemas/expense.py
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, model_validator

from app.schemas.enums import API_EXPENSE_CATEGORIES, ExpenseCategory, values_of
from app.schemas.validation import ensure_object, require_number, require_one_of


class ExpenseCreate(BaseModel):
    category: ExpenseCategory
    amount: float
    trip_id: Optional[str] = None
    description: Optional[str] = None
    expense_date: Optional[date] = None

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        data = ensure_object(data)
        require_one_of(data, "category", values_of(API_EXPENSE_CATEGORIES))
        require_number(data, "amount")
        return data
