from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    """Headline dashboard figures (amounts in INR, changes in percent)."""
    monthly_cost: float = Field(..., description="Expenses dated in the current month")
    total_revenue: float = Field(..., description="All-time revenue")
    production_unit_count: int = Field(..., description="Units with status 'active'")
    profit_margin: float = Field(..., description="All-time profit margin; 0 without revenue")
    cost_percent_change: float = Field(..., description="Current vs previous month expenses")
    revenue_percent_change: float = Field(..., description="Current vs previous month revenue")
    production_unit_change: int = Field(..., description="Units created this month")
    profit_margin_change: float = Field(..., description="This month's margin minus last month's")


class Transaction(BaseModel):
    """Expense or revenue row for the recent transactions feed."""
    id: int
    type: Literal["expense", "revenue"]
    description: str
    amount: float
    date: datetime
    production_unit_id: int
    production_unit_name: str = Field(..., description="Unit name, 'Unknown' when the unit is gone")
    category: str


class CostTrend(BaseModel):
    """Expense total for one calendar month."""
    period: str = Field(..., description="Month label, e.g. 'Jan 2025'")
    amount: float


class ProfitLossPoint(BaseModel):
    """Revenue, expenses and profit for one calendar month."""
    period: str
    revenue: float
    expenses: float
    profit: float
