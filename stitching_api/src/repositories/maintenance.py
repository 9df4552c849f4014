from __future__ import annotations

from typing import List, Optional

from src.db.models.maintenance import MaintenanceRecord
from .base import BaseRepository


class MaintenanceRecordRepository(BaseRepository[MaintenanceRecord]):
    """Repository for machine maintenance records."""

    model = MaintenanceRecord

    async def list_records(
        self, *, production_unit_id: Optional[int] = None, limit: Optional[int] = None, offset: int = 0
    ) -> List[MaintenanceRecord]:
        if production_unit_id is not None:
            return await self.list_where(
                lambda m: m.production_unit_id == production_unit_id, limit=limit, offset=offset
            )
        return await self.list(limit=limit, offset=offset)
