from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from src.core.deps import require_auth_if_enabled
from src.db.session import WorkbookSession, get_session
from src.repositories.finance import ExpenseRepository, RevenueRepository
from src.schemas.finance import (
    ExpenseCreate,
    ExpenseRead,
    ExpenseUpdate,
    RevenueCreate,
    RevenueRead,
    RevenueUpdate,
)
from src.services.exceptions import NotFoundError
from src.services.finance import FinanceService

expenses_router = APIRouter(
    prefix="/expenses",
    tags=["Expenses"],
    dependencies=[Depends(require_auth_if_enabled)],
)
revenues_router = APIRouter(
    prefix="/revenues",
    tags=["Revenues"],
    dependencies=[Depends(require_auth_if_enabled)],
)


# PUBLIC_INTERFACE
@expenses_router.get(
    "",
    response_model=List[ExpenseRead],
    summary="List expenses",
    description="List expenses, optionally only those of one production unit.",
)
async def list_expenses(
    session: WorkbookSession = Depends(get_session),
    production_unit_id: Optional[int] = Query(None, ge=1, description="Filter by production unit"),
    limit: int = Query(1000, ge=1, le=10000),
    offset: int = Query(0, ge=0),
) -> List[ExpenseRead]:
    repo = ExpenseRepository(session)
    records = await repo.list_expenses(production_unit_id=production_unit_id, limit=limit, offset=offset)
    return [ExpenseRead.model_validate(r) for r in records]


# PUBLIC_INTERFACE
@expenses_router.get("/{expense_id}", response_model=ExpenseRead, summary="Get expense")
async def get_expense(
    expense_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> ExpenseRead:
    record = await ExpenseRepository(session).get(expense_id)
    if not record:
        raise NotFoundError(f"Expense {expense_id} not found")
    return ExpenseRead.model_validate(record)


# PUBLIC_INTERFACE
@expenses_router.post(
    "",
    response_model=ExpenseRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create expense",
    description=(
        "Record an expense and add its amount to the production unit's cost_to_date. "
        "When gst_rate is given without base_amount/gst_amount both are derived from the amount."
    ),
)
async def create_expense(
    payload: ExpenseCreate,
    session: WorkbookSession = Depends(get_session),
) -> ExpenseRead:
    record = await FinanceService(session).create_expense(payload.model_dump())
    return ExpenseRead.model_validate(record)


# PUBLIC_INTERFACE
@expenses_router.put(
    "/{expense_id}",
    response_model=ExpenseRead,
    summary="Update expense",
    description="Partial update; the unit cost_to_date follows amount and unit changes.",
)
async def update_expense(
    payload: ExpenseUpdate,
    expense_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> ExpenseRead:
    record = await FinanceService(session).update_expense(expense_id, payload.model_dump(exclude_unset=True))
    return ExpenseRead.model_validate(record)


# PUBLIC_INTERFACE
@expenses_router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete expense")
async def delete_expense(
    expense_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> None:
    await FinanceService(session).delete_expense(expense_id)


# PUBLIC_INTERFACE
@revenues_router.get(
    "",
    response_model=List[RevenueRead],
    summary="List revenues",
    description="List revenues, optionally only those of one production unit.",
)
async def list_revenues(
    session: WorkbookSession = Depends(get_session),
    production_unit_id: Optional[int] = Query(None, ge=1, description="Filter by production unit"),
    limit: int = Query(1000, ge=1, le=10000),
    offset: int = Query(0, ge=0),
) -> List[RevenueRead]:
    repo = RevenueRepository(session)
    records = await repo.list_revenues(production_unit_id=production_unit_id, limit=limit, offset=offset)
    return [RevenueRead.model_validate(r) for r in records]


# PUBLIC_INTERFACE
@revenues_router.get("/{revenue_id}", response_model=RevenueRead, summary="Get revenue")
async def get_revenue(
    revenue_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> RevenueRead:
    record = await RevenueRepository(session).get(revenue_id)
    if not record:
        raise NotFoundError(f"Revenue {revenue_id} not found")
    return RevenueRead.model_validate(record)


# PUBLIC_INTERFACE
@revenues_router.post(
    "",
    response_model=RevenueRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create revenue",
)
async def create_revenue(
    payload: RevenueCreate,
    session: WorkbookSession = Depends(get_session),
) -> RevenueRead:
    record = await FinanceService(session).create_revenue(payload.model_dump())
    return RevenueRead.model_validate(record)


# PUBLIC_INTERFACE
@revenues_router.put("/{revenue_id}", response_model=RevenueRead, summary="Update revenue")
async def update_revenue(
    payload: RevenueUpdate,
    revenue_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> RevenueRead:
    record = await FinanceService(session).update_revenue(revenue_id, payload.model_dump(exclude_unset=True))
    return RevenueRead.model_validate(record)


# PUBLIC_INTERFACE
@revenues_router.delete("/{revenue_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete revenue")
async def delete_revenue(
    revenue_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> None:
    await FinanceService(session).delete_revenue(revenue_id)
