from __future__ import annotations

from typing import List, Optional

from src.db.models.production import ProductionUnit
from .base import BaseRepository


class ProductionUnitRepository(BaseRepository[ProductionUnit]):
    """Repository for production units."""

    model = ProductionUnit

    async def list_units(self, *, status: Optional[str] = None, limit: Optional[int] = None, offset: int = 0) -> List[ProductionUnit]:
        if status:
            return await self.list_where(lambda u: u.status == status, limit=limit, offset=offset)
        return await self.list(limit=limit, offset=offset)

    def _adjust_cost(self, unit_id: int, delta: float) -> Optional[ProductionUnit]:
        """Add `delta` to a unit's cost_to_date; returns None when the unit is missing."""
        unit = self._get(unit_id)
        if unit is None:
            return None
        return self._update(unit_id, {"cost_to_date": round(unit.cost_to_date + delta, 2)})
