from __future__ import annotations

from typing import Optional

from pydantic import Field

from src.db.base import Base, IntPkMixin, Timestamp, utcnow


class Expense(IntPkMixin, Base):
    """Money spent by a production unit."""
    __tablename__ = "expenses"
    __sheet_name__ = "Expenses"

    production_unit_id: int
    description: str
    amount: float
    base_amount: Optional[float] = None
    gst_rate: Optional[float] = None
    gst_amount: Optional[float] = None
    hsn: Optional[str] = None
    invoice_number: Optional[str] = None
    date: Timestamp = Field(default_factory=utcnow)
    category: str
    currency: str = "INR"


class Revenue(IntPkMixin, Base):
    """Money earned by a production unit, optionally against an order."""
    __tablename__ = "revenues"
    __sheet_name__ = "Revenues"

    production_unit_id: int
    description: str
    amount: float
    base_amount: Optional[float] = None
    gst_rate: Optional[float] = None
    gst_amount: Optional[float] = None
    hsn: Optional[str] = None
    invoice_number: Optional[str] = None
    date: Timestamp = Field(default_factory=utcnow)
    category: str
    currency: str = "INR"
    order_id: Optional[int] = None
