# app/models/expense.py
"""Expenses. category accepts all seven stored values; the API logs only four."""

from sqlalchemy import Column, Date, Float, ForeignKey, String, Text
from app.database import Base
from app.models._columns import created_at, uuid_pk


class Expense(Base):
    __tablename__ = "expenses"

    id = uuid_pk()
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), index=True)
    trip_id = Column(String(36), ForeignKey("trips.id"))
    category = Column(String(20), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    amount = Column(Float, nullable=False)
    expense_date = Column(Date, nullable=False)
    receipt_url = Column(String(500))
    created_by = Column(String(36))
    created_at = created_at()

    def __repr__(self):
        return f"<Expense {self.category} amount={self.amount}>"
