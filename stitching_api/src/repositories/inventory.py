from __future__ import annotations

from typing import List, Optional

from src.db.models.inventory import InventoryItem
from .base import BaseRepository


class InventoryItemRepository(BaseRepository[InventoryItem]):
    """Repository for inventory items."""

    model = InventoryItem

    async def list_items(
        self, *, production_unit_id: Optional[int] = None, limit: Optional[int] = None, offset: int = 0
    ) -> List[InventoryItem]:
        if production_unit_id is not None:
            return await self.list_where(
                lambda i: i.production_unit_id == production_unit_id, limit=limit, offset=offset
            )
        return await self.list(limit=limit, offset=offset)
