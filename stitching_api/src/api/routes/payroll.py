from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from src.core.deps import require_auth_if_enabled
from src.db.session import WorkbookSession, get_session
from src.repositories.payroll import SalaryPaymentRepository
from src.schemas.payroll import SalaryPaymentCreate, SalaryPaymentRead, SalaryPaymentUpdate
from src.services.exceptions import NotFoundError
from src.services.operations import PayrollService

router = APIRouter(
    prefix="/salary-payments",
    tags=["Salary Payments"],
    dependencies=[Depends(require_auth_if_enabled)],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[SalaryPaymentRead],
    summary="List salary payments",
    description=(
        "List salary payments. Filter by production_unit_id, or by month and year together "
        "(month matching is case-insensitive). The unit filter wins when both are given."
    ),
)
async def list_salary_payments(
    session: WorkbookSession = Depends(get_session),
    production_unit_id: Optional[int] = Query(None, ge=1),
    month: Optional[str] = Query(None, description="e.g. 'January'"),
    year: Optional[str] = Query(None, description="e.g. '2025'"),
    limit: int = Query(1000, ge=1, le=10000),
    offset: int = Query(0, ge=0),
) -> List[SalaryPaymentRead]:
    repo = SalaryPaymentRepository(session)
    records = await repo.list_payments(
        production_unit_id=production_unit_id, month=month, year=year, limit=limit, offset=offset
    )
    return [SalaryPaymentRead.model_validate(r) for r in records]


# PUBLIC_INTERFACE
@router.get("/{payment_id}", response_model=SalaryPaymentRead, summary="Get salary payment")
async def get_salary_payment(
    payment_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> SalaryPaymentRead:
    record = await SalaryPaymentRepository(session).get(payment_id)
    if not record:
        raise NotFoundError(f"Salary payment {payment_id} not found")
    return SalaryPaymentRead.model_validate(record)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=SalaryPaymentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record salary payment",
)
async def create_salary_payment(
    payload: SalaryPaymentCreate,
    session: WorkbookSession = Depends(get_session),
) -> SalaryPaymentRead:
    record = await PayrollService(session).create(payload.model_dump())
    return SalaryPaymentRead.model_validate(record)


# PUBLIC_INTERFACE
@router.put("/{payment_id}", response_model=SalaryPaymentRead, summary="Update salary payment")
async def update_salary_payment(
    payload: SalaryPaymentUpdate,
    payment_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> SalaryPaymentRead:
    record = await PayrollService(session).update(payment_id, payload.model_dump(exclude_unset=True))
    return SalaryPaymentRead.model_validate(record)


# PUBLIC_INTERFACE
@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete salary payment")
async def delete_salary_payment(
    payment_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> None:
    await PayrollService(session).delete(payment_id)
