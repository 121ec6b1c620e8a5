# app/models/_columns.py
"""Column helpers shared by every table. Timestamps are stored in UTC."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String


def new_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes even for timezone-aware columns."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def uuid_pk():
    return Column(String(36), primary_key=True, default=new_uuid)


def created_at():
    return Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)


def updated_at():
    return Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
