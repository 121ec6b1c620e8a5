# app/schemas/validation.py
"""
Shared request-body checks.

Body models run these inside a mode="before" validator so the first failing
rule produces the exact message the API returns. parse_body() converts a
Pydantic failure into the service's ValidationError (HTTP 400).
"""

from typing import Any, Iterable, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from app.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def ensure_object(data: Any) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise PydanticCustomError("body_type", "Request body must be a JSON object")
    return data


def require_present(data: dict, *fields: str, message: Optional[str] = None):
    """Empty strings, zero and null count as missing."""
    if any(not data.get(f) for f in fields):
        if message is None:
            message = f"{fields[0]} is required"
        raise PydanticCustomError("missing_field", message)


def require_number(data: dict, field: str):
    value = data.get(field)
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PydanticCustomError("number_type", "{field} must be a number", {"field": field})


def require_one_of(data: dict, field: str, allowed: Iterable[str]):
    allowed = list(allowed)
    value = data.get(field)
    if not value or value not in allowed:
        raise PydanticCustomError(
            "enum_value",
            "{field} must be one of: {choices}",
            {"field": field, "choices": ", ".join(allowed)},
        )


def reject_nulls(data: dict, *fields: str):
    """Fields that may be omitted but never cleared."""
    for field in fields:
        if field in data and data[field] is None:
            raise PydanticCustomError("null_value", "{field} cannot be null", {"field": field})


def drop_nulls(data: dict, *fields: str) -> dict:
    """Remove explicit nulls so the model defaults apply."""
    return {k: v for k, v in data.items() if not (k in fields and v is None)}


def first_error_message(exc: PydanticValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    err = errors[0]
    loc = ".".join(str(part) for part in err.get("loc", ()))
    return f"{loc}: {err['msg']}" if loc else err["msg"]


def parse_body(model: Type[ModelT], payload: Any) -> ModelT:
    try:
        return model.model_validate(payload if payload is not None else {})
    except PydanticValidationError as exc:
        raise ValidationError(first_error_message(exc)) from None
