from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

OrderStatus = Literal["pending", "in-progress", "ready", "delivered", "cancelled"]


class CustomerCreate(BaseModel):
    """Create payload for a customer."""
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    gstin: Optional[str] = Field(None, description="Customer GST identification number")
    notes: Optional[str] = None


class CustomerUpdate(BaseModel):
    """Partial update for a customer."""
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    gstin: Optional[str] = None
    notes: Optional[str] = None


class CustomerRead(CustomerCreate):
    """Read model for a customer."""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Customer ID")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")


class OrderCreate(BaseModel):
    """Create payload for a stitching order."""
    order_number: str = Field(..., min_length=1, description="Unique order number")
    customer_id: int = Field(..., ge=1)
    production_unit_id: int = Field(..., ge=1)
    order_date: Optional[datetime] = Field(None, description="Defaults to now")
    delivery_date: Optional[datetime] = None
    status: OrderStatus = Field("pending")
    total_amount: float = Field(..., ge=0, description="GST-inclusive order value")
    paid_amount: float = Field(0, ge=0)
    base_amount: Optional[float] = Field(None, ge=0)
    gst_rate: Optional[float] = Field(None, ge=0, le=100)
    gst_amount: Optional[float] = Field(None, ge=0)
    hsn: Optional[str] = None
    invoice_number: Optional[str] = None
    description: str = Field(..., min_length=1)
    currency: str = Field("INR")
    category: str = Field(..., min_length=1)
    measurements: Optional[str] = None
    fabric_details: Optional[str] = None
    special_instructions: Optional[str] = None


class OrderUpdate(BaseModel):
    """Partial update for an order."""
    order_number: Optional[str] = Field(None, min_length=1)
    customer_id: Optional[int] = Field(None, ge=1)
    production_unit_id: Optional[int] = Field(None, ge=1)
    order_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
    status: Optional[OrderStatus] = None
    total_amount: Optional[float] = Field(None, ge=0)
    paid_amount: Optional[float] = Field(None, ge=0)
    base_amount: Optional[float] = Field(None, ge=0)
    gst_rate: Optional[float] = Field(None, ge=0, le=100)
    gst_amount: Optional[float] = Field(None, ge=0)
    hsn: Optional[str] = None
    invoice_number: Optional[str] = None
    description: Optional[str] = Field(None, min_length=1)
    currency: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    measurements: Optional[str] = None
    fabric_details: Optional[str] = None
    special_instructions: Optional[str] = None


class OrderRead(BaseModel):
    """Read model for an order."""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Order ID")
    order_number: str
    customer_id: int
    production_unit_id: int
    order_date: datetime
    delivery_date: Optional[datetime] = None
    status: str
    total_amount: float
    paid_amount: float
    base_amount: Optional[float] = None
    gst_rate: Optional[float] = None
    gst_amount: Optional[float] = None
    hsn: Optional[str] = None
    invoice_number: Optional[str] = None
    description: str
    currency: str
    category: str
    measurements: Optional[str] = None
    fabric_details: Optional[str] = None
    special_instructions: Optional[str] = None

    @computed_field  # type: ignore[misc]
    @property
    def balance_due(self) -> float:
        """Outstanding amount: total minus paid."""
        return round(self.total_amount - self.paid_amount, 2)
