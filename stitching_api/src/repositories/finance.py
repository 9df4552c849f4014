from __future__ import annotations

from typing import List, Optional

from src.db.models.finance import Expense, Revenue
from .base import BaseRepository


class ExpenseRepository(BaseRepository[Expense]):
    """Repository for expenses."""

    model = Expense

    async def list_expenses(
        self, *, production_unit_id: Optional[int] = None, limit: Optional[int] = None, offset: int = 0
    ) -> List[Expense]:
        if production_unit_id is not None:
            return await self.list_where(
                lambda e: e.production_unit_id == production_unit_id, limit=limit, offset=offset
            )
        return await self.list(limit=limit, offset=offset)


class RevenueRepository(BaseRepository[Revenue]):
    """Repository for revenues."""

    model = Revenue

    async def list_revenues(
        self, *, production_unit_id: Optional[int] = None, limit: Optional[int] = None, offset: int = 0
    ) -> List[Revenue]:
        if production_unit_id is not None:
            return await self.list_where(
                lambda r: r.production_unit_id == production_unit_id, limit=limit, offset=offset
            )
        return await self.list(limit=limit, offset=offset)
