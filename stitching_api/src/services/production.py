from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from src.db.models.production import ProductionUnit
from src.db.session import WorkbookSession
from src.repositories.production import ProductionUnitRepository
from src.services.base import BaseService
from src.services.exceptions import InvalidReferenceError, NotFoundError

logger = logging.getLogger(__name__)


def require_unit(repo: ProductionUnitRepository, unit_id: Optional[int]) -> Optional[ProductionUnit]:
    """
    Return the referenced production unit, raising InvalidReferenceError when it is missing.

    Must run inside `session.run_sync`. A None id is accepted and returns None.
    """
    if unit_id is None:
        return None
    unit = repo._get(unit_id)
    if unit is None:
        raise InvalidReferenceError(
            f"Production unit {unit_id} does not exist",
            details={"field": "production_unit_id", "value": unit_id},
        )
    return unit


class ProductionUnitService(BaseService):
    """
    Domain service for production units.

    cost_to_date is owned by the expense bookkeeping in FinanceService; client
    payloads never set it.
    """

    def __init__(self, session: WorkbookSession) -> None:
        super().__init__(session)
        self.unit_repo = ProductionUnitRepository(session)

    # PUBLIC_INTERFACE
    async def create_unit(self, values: Dict[str, Any]) -> ProductionUnit:
        """Create a production unit with cost_to_date starting at zero."""
        values = {k: v for k, v in values.items() if k != "cost_to_date"}
        values["cost_to_date"] = 0.0
        unit = await self.unit_repo.create(values)
        logger.info("Created production unit %s (%s)", unit.id, unit.name)
        return unit

    # PUBLIC_INTERFACE
    async def update_unit(self, unit_id: int, changes: Dict[str, Any]) -> ProductionUnit:
        """Apply a partial update; raises NotFoundError for unknown ids."""
        changes = {k: v for k, v in changes.items() if k != "cost_to_date"}
        unit = await self.unit_repo.update(unit_id, changes)
        if unit is None:
            raise NotFoundError(f"Production unit {unit_id} not found")
        logger.info("Updated production unit %s", unit_id)
        return unit

    # PUBLIC_INTERFACE
    async def delete_unit(self, unit_id: int) -> None:
        """Delete a production unit. Records that reference it are left untouched."""
        if not await self.unit_repo.delete(unit_id):
            raise NotFoundError(f"Production unit {unit_id} not found")
        logger.info("Deleted production unit %s", unit_id)
