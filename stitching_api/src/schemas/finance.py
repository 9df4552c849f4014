from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _MoneyFields(BaseModel):
    """Fields shared by expenses and revenues (amounts are GST-inclusive INR)."""
    production_unit_id: int = Field(..., ge=1, description="Owning production unit")
    description: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0, description="GST-inclusive amount")
    base_amount: Optional[float] = Field(None, ge=0, description="Taxable value; derived from amount when omitted")
    gst_rate: Optional[float] = Field(None, ge=0, le=100, description="GST rate in percent")
    gst_amount: Optional[float] = Field(None, ge=0, description="GST component; derived from amount when omitted")
    hsn: Optional[str] = Field(None, description="HSN classification code")
    invoice_number: Optional[str] = Field(None)
    date: Optional[datetime] = Field(None, description="Transaction date; defaults to now")
    category: str = Field(..., min_length=1)
    currency: str = Field("INR")


class _MoneyUpdate(BaseModel):
    production_unit_id: Optional[int] = Field(None, ge=1)
    description: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, ge=0)
    base_amount: Optional[float] = Field(None, ge=0)
    gst_rate: Optional[float] = Field(None, ge=0, le=100)
    gst_amount: Optional[float] = Field(None, ge=0)
    hsn: Optional[str] = None
    invoice_number: Optional[str] = None
    date: Optional[datetime] = None
    category: Optional[str] = Field(None, min_length=1)
    currency: Optional[str] = None


class _MoneyRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    production_unit_id: int
    description: str
    amount: float
    base_amount: Optional[float] = None
    gst_rate: Optional[float] = None
    gst_amount: Optional[float] = None
    hsn: Optional[str] = None
    invoice_number: Optional[str] = None
    date: datetime = Field(..., description="Transaction date (UTC)")
    category: str
    currency: str


class ExpenseCreate(_MoneyFields):
    """Create payload for an expense."""


class ExpenseUpdate(_MoneyUpdate):
    """Partial update for an expense."""


class ExpenseRead(_MoneyRead):
    """Read model for an expense."""
    id: int = Field(..., description="Expense ID")


class RevenueCreate(_MoneyFields):
    """Create payload for a revenue, optionally linked to an order."""
    order_id: Optional[int] = Field(None, ge=1, description="Order this revenue settles")


class RevenueUpdate(_MoneyUpdate):
    """Partial update for a revenue."""
    order_id: Optional[int] = Field(None, ge=1)


class RevenueRead(_MoneyRead):
    """Read model for a revenue."""
    id: int = Field(..., description="Revenue ID")
    order_id: Optional[int] = None
