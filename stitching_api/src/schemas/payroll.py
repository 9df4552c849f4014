from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SalaryPaymentCreate(BaseModel):
    """Create payload for a salary payment."""
    employee_name: str = Field(..., min_length=1)
    employee_id: Optional[str] = None
    production_unit_id: int = Field(..., ge=1)
    amount: float = Field(..., ge=0)
    payment_date: Optional[datetime] = Field(None, description="Defaults to now")
    payment_method: str = Field("cash", description="cash, bank transfer, UPI...")
    notes: Optional[str] = None
    month: str = Field(..., min_length=1, description="Month the salary is for, e.g. 'January'")
    year: str = Field(..., min_length=4, max_length=4, description="Four-digit year")


class SalaryPaymentUpdate(BaseModel):
    """Partial update for a salary payment."""
    employee_name: Optional[str] = Field(None, min_length=1)
    employee_id: Optional[str] = None
    production_unit_id: Optional[int] = Field(None, ge=1)
    amount: Optional[float] = Field(None, ge=0)
    payment_date: Optional[datetime] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    month: Optional[str] = Field(None, min_length=1)
    year: Optional[str] = Field(None, min_length=4, max_length=4)


class SalaryPaymentRead(BaseModel):
    """Read model for a salary payment."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_name: str
    employee_id: Optional[str] = None
    production_unit_id: int
    amount: float
    payment_date: datetime
    payment_method: str
    notes: Optional[str] = None
    month: str
    year: str
