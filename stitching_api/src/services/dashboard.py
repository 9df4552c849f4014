from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from src.db.base import utcnow
from src.db.session import WorkbookSession
from src.repositories.finance import ExpenseRepository, RevenueRepository
from src.repositories.production import ProductionUnitRepository
from src.services.base import BaseService

Period = Tuple[int, int]


def shift_month(period: Period, delta: int) -> Period:
    """Move a (year, month) pair by `delta` calendar months."""
    year, month = period
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def period_label(period: Period) -> str:
    """Label such as 'Jan 2025'."""
    return datetime(period[0], period[1], 1).strftime("%b %Y")


def _period_of(value: datetime) -> Period:
    return value.year, value.month


def _sum_amounts(records: Iterable[Any], period: Optional[Period] = None) -> float:
    return sum(r.amount for r in records if period is None or _period_of(r.date) == period)


def _margin(revenue: float, expenses: float) -> float:
    if revenue == 0:
        return 0.0
    return (revenue - expenses) / revenue * 100


def _percent_change(current: float, previous: float) -> float:
    if previous == 0:
        return 0.0
    return (current - previous) / previous * 100


class DashboardService(BaseService):
    """
    Read-only aggregates for the dashboard.

    Month boundaries are calendar months of naive UTC timestamps. Every method
    accepts an explicit `now` so results are reproducible.
    """

    def __init__(self, session: WorkbookSession) -> None:
        super().__init__(session)
        self.unit_repo = ProductionUnitRepository(session)
        self.expense_repo = ExpenseRepository(session)
        self.revenue_repo = RevenueRepository(session)

    # PUBLIC_INTERFACE
    async def stats(self, now: Optional[datetime] = None) -> Dict[str, float]:
        """
        Headline figures.

        Returns:
            monthly_cost: expenses dated in the current month
            total_revenue: all revenues ever recorded
            production_unit_count: units with status 'active'
            profit_margin: (total revenue - total expenses) / total revenue * 100, 0 without revenue
            cost_percent_change / revenue_percent_change: current vs previous month, 0 when previous is 0
            production_unit_change: units created in the current month
            profit_margin_change: current month margin minus previous month margin
        """
        return await self.session.run_sync(self._stats, now or utcnow())

    def _stats(self, now: datetime) -> Dict[str, float]:
        expenses = self.expense_repo._all()
        revenues = self.revenue_repo._all()
        units = self.unit_repo._all()

        current = _period_of(now)
        previous = shift_month(current, -1)

        current_cost = _sum_amounts(expenses, current)
        previous_cost = _sum_amounts(expenses, previous)
        current_revenue = _sum_amounts(revenues, current)
        previous_revenue = _sum_amounts(revenues, previous)
        total_revenue = _sum_amounts(revenues)
        total_expenses = _sum_amounts(expenses)

        margin_change = _margin(current_revenue, current_cost) - _margin(previous_revenue, previous_cost)
        return {
            "monthly_cost": round(current_cost, 2),
            "total_revenue": round(total_revenue, 2),
            "production_unit_count": sum(1 for u in units if u.status == "active"),
            "profit_margin": round(_margin(total_revenue, total_expenses), 2),
            "cost_percent_change": round(_percent_change(current_cost, previous_cost), 2),
            "revenue_percent_change": round(_percent_change(current_revenue, previous_revenue), 2),
            "production_unit_change": sum(1 for u in units if _period_of(u.created_at) == current),
            "profit_margin_change": round(margin_change, 2),
        }

    # PUBLIC_INTERFACE
    async def recent_transactions(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Expenses and revenues merged, newest first, labelled with their unit name."""
        return await self.session.run_sync(self._recent_transactions, limit)

    def _recent_transactions(self, limit: int) -> List[Dict[str, Any]]:
        names = {u.id: u.name for u in self.unit_repo._all()}
        rows: List[Dict[str, Any]] = []
        for kind, records in (("expense", self.expense_repo._all()), ("revenue", self.revenue_repo._all())):
            for r in records:
                rows.append(
                    {
                        "id": r.id,
                        "type": kind,
                        "description": r.description,
                        "amount": r.amount,
                        "date": r.date,
                        "production_unit_id": r.production_unit_id,
                        "production_unit_name": names.get(r.production_unit_id, "Unknown"),
                        "category": r.category,
                    }
                )
        rows.sort(key=lambda row: row["date"], reverse=True)
        return rows[:limit]

    def _periods(self, months: int, now: datetime) -> List[Period]:
        current = _period_of(now)
        return [shift_month(current, -offset) for offset in range(months - 1, -1, -1)]

    # PUBLIC_INTERFACE
    async def cost_trends(self, months: int = 12, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """Monthly expense totals, oldest first, ending with the current month."""
        return await self.session.run_sync(self._cost_trends, months, now or utcnow())

    def _cost_trends(self, months: int, now: datetime) -> List[Dict[str, Any]]:
        expenses = self.expense_repo._all()
        return [
            {"period": period_label(p), "amount": round(_sum_amounts(expenses, p), 2)}
            for p in self._periods(months, now)
        ]

    # PUBLIC_INTERFACE
    async def profit_loss(self, months: int = 6, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """Monthly revenue, expenses and profit, oldest first."""
        return await self.session.run_sync(self._profit_loss, months, now or utcnow())

    def _profit_loss(self, months: int, now: datetime) -> List[Dict[str, Any]]:
        expenses = self.expense_repo._all()
        revenues = self.revenue_repo._all()
        rows = []
        for p in self._periods(months, now):
            revenue = _sum_amounts(revenues, p)
            cost = _sum_amounts(expenses, p)
            rows.append(
                {
                    "period": period_label(p),
                    "revenue": round(revenue, 2),
                    "expenses": round(cost, 2),
                    "profit": round(revenue - cost, 2),
                }
            )
        return rows
