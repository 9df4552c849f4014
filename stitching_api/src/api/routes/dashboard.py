from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from src.core.deps import require_auth_if_enabled
from src.db.session import WorkbookSession, get_session
from src.schemas.dashboard import CostTrend, DashboardStats, ProfitLossPoint, Transaction
from src.services.dashboard import DashboardService

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(require_auth_if_enabled)],
)


# PUBLIC_INTERFACE
@router.get(
    "/stats",
    response_model=DashboardStats,
    summary="Dashboard statistics",
    description="Monthly cost, total revenue, active units, profit margin and month-over-month changes.",
)
async def dashboard_stats(session: WorkbookSession = Depends(get_session)) -> DashboardStats:
    return DashboardStats(**await DashboardService(session).stats())


# PUBLIC_INTERFACE
@router.get(
    "/transactions",
    response_model=List[Transaction],
    summary="Recent transactions",
    description="Expenses and revenues merged, newest first.",
)
async def recent_transactions(
    session: WorkbookSession = Depends(get_session),
    limit: int = Query(10, ge=1, le=1000, description="Number of transactions"),
) -> List[Transaction]:
    rows = await DashboardService(session).recent_transactions(limit=limit)
    return [Transaction(**r) for r in rows]


# PUBLIC_INTERFACE
@router.get(
    "/cost-trends",
    response_model=List[CostTrend],
    summary="Monthly cost trends",
    description="Expense totals per calendar month, oldest first, ending with the current month.",
)
async def cost_trends(
    session: WorkbookSession = Depends(get_session),
    months: int = Query(12, ge=1, le=120, description="Number of months"),
) -> List[CostTrend]:
    rows = await DashboardService(session).cost_trends(months=months)
    return [CostTrend(**r) for r in rows]


# PUBLIC_INTERFACE
@router.get(
    "/profit-loss",
    response_model=List[ProfitLossPoint],
    summary="Profit and loss by month",
)
async def profit_loss(
    session: WorkbookSession = Depends(get_session),
    months: int = Query(6, ge=1, le=120, description="Number of months"),
) -> List[ProfitLossPoint]:
    rows = await DashboardService(session).profit_loss(months=months)
    return [ProfitLossPoint(**r) for r in rows]
