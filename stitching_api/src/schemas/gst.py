from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class GstCalculationRequest(BaseModel):
    """Convert between GST-inclusive totals and taxable values."""
    amount: float = Field(..., ge=0, description="Amount to convert")
    gst_rate: float = Field(..., ge=0, le=100, description="GST rate in percent")
    inclusive: bool = Field(True, description="True when `amount` already includes GST")


class GstCalculationResponse(BaseModel):
    """Result of a GST calculation (rounded to 2 decimals)."""
    base_amount: float
    gst_amount: float
    total_amount: float
    gst_rate: float
    formatted_total: str = Field(..., description="Total in Indian currency format, e.g. '₹1,18,000.00'")


class HsnCodeRead(BaseModel):
    code: str
    description: str
    default_rate: int


class GstCategoryRead(BaseModel):
    name: str
    kind: Literal["expense", "revenue"]
    default_rate: int
    default_hsn: Optional[str] = None


class GstReferenceData(BaseModel):
    """GST slabs, HSN codes and category defaults."""
    rates: List[int]
    hsn_codes: List[HsnCodeRead]
    expense_categories: List[GstCategoryRead]
    revenue_categories: List[GstCategoryRead]


class SampleDataResponse(BaseModel):
    """Outcome of loading the sample GST data."""
    message: str
    expenses_added: int
    revenues_added: int
    production_unit_id: int
