from __future__ import annotations

from typing import Optional

from pydantic import Field

from src.db.base import Base, IntPkMixin, Timestamp, utcnow


class SalaryPayment(IntPkMixin, Base):
    """Salary paid to an employee of a production unit for a month."""
    __tablename__ = "salary_payments"
    __sheet_name__ = "Salary Payments"

    employee_name: str
    employee_id: Optional[str] = None
    production_unit_id: int
    amount: float
    payment_date: Timestamp = Field(default_factory=utcnow)
    payment_method: str = "cash"
    notes: Optional[str] = None
    month: str
    year: str
