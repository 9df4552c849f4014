from __future__ import annotations

from typing import List, Optional

from src.db.models.payroll import SalaryPayment
from .base import BaseRepository


class SalaryPaymentRepository(BaseRepository[SalaryPayment]):
    """Repository for salary payments."""

    model = SalaryPayment

    async def list_payments(
        self,
        *,
        production_unit_id: Optional[int] = None,
        month: Optional[str] = None,
        year: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[SalaryPayment]:
        if production_unit_id is not None:
            return await self.list_where(
                lambda p: p.production_unit_id == production_unit_id, limit=limit, offset=offset
            )
        if month and year:
            month_key = month.strip().lower()
            return await self.list_where(
                lambda p: p.month.strip().lower() == month_key and p.year.strip() == year.strip(),
                limit=limit,
                offset=offset,
            )
        return await self.list(limit=limit, offset=offset)
