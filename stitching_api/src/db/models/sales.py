from __future__ import annotations

from typing import Optional

from pydantic import Field

from src.db.base import Base, IntPkMixin, Timestamp, utcnow


class Customer(IntPkMixin, Base):
    """Customer master."""
    __tablename__ = "customers"
    __sheet_name__ = "Customers"

    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    gstin: Optional[str] = None
    notes: Optional[str] = None
    created_at: Timestamp = Field(default_factory=utcnow)


class Order(IntPkMixin, Base):
    """Stitching order placed by a customer with a production unit."""
    __tablename__ = "orders"
    __sheet_name__ = "Orders"

    order_number: str
    customer_id: int
    production_unit_id: int
    order_date: Timestamp = Field(default_factory=utcnow)
    delivery_date: Optional[Timestamp] = None
    status: str = "pending"
    total_amount: float
    paid_amount: float = 0.0
    base_amount: Optional[float] = None
    gst_rate: Optional[float] = None
    gst_amount: Optional[float] = None
    hsn: Optional[str] = None
    invoice_number: Optional[str] = None
    description: str
    currency: str = "INR"
    category: str
    measurements: Optional[str] = None
    fabric_details: Optional[str] = None
    special_instructions: Optional[str] = None
