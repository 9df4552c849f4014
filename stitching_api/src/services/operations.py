from __future__ import annotations

import logging
from typing import Any, Dict

from src.db.session import WorkbookSession
from src.repositories.base import BaseRepository
from src.repositories.inventory import InventoryItemRepository
from src.repositories.maintenance import MaintenanceRecordRepository
from src.repositories.payroll import SalaryPaymentRepository
from src.repositories.production import ProductionUnitRepository
from src.services.base import BaseService
from src.services.exceptions import NotFoundError
from src.services.production import require_unit

logger = logging.getLogger(__name__)


class UnitScopedService(BaseService):
    """
    CRUD for records that belong to a production unit (inventory items, salary
    payments, maintenance records).

    The referenced unit is checked on create and whenever an update names one.
    These records do not contribute to cost_to_date.
    """

    label = "Record"

    def __init__(self, session: WorkbookSession, repo: BaseRepository) -> None:
        super().__init__(session)
        self.repo = repo
        self.unit_repo = ProductionUnitRepository(session)

    # PUBLIC_INTERFACE
    async def create(self, values: Dict[str, Any]):
        return await self.session.run_sync(self._create, values)

    # PUBLIC_INTERFACE
    async def update(self, record_id: int, changes: Dict[str, Any]):
        return await self.session.run_sync(self._update, record_id, changes)

    # PUBLIC_INTERFACE
    async def delete(self, record_id: int) -> None:
        if not await self.repo.delete(record_id):
            raise NotFoundError(f"{self.label} {record_id} not found")
        logger.info("Deleted %s %s", self.label.lower(), record_id)

    def _create(self, values: Dict[str, Any]):
        require_unit(self.unit_repo, values.get("production_unit_id"))
        record = self.repo._insert(values)
        logger.info("Created %s %s", self.label.lower(), record.id)
        return record

    def _update(self, record_id: int, changes: Dict[str, Any]):
        if self.repo._get(record_id) is None:
            raise NotFoundError(f"{self.label} {record_id} not found")
        if "production_unit_id" in changes:
            require_unit(self.unit_repo, changes["production_unit_id"])
        record = self.repo._update(record_id, changes)
        logger.info("Updated %s %s", self.label.lower(), record_id)
        return record


class InventoryService(UnitScopedService):
    label = "Inventory item"

    def __init__(self, session: WorkbookSession) -> None:
        super().__init__(session, InventoryItemRepository(session))


class PayrollService(UnitScopedService):
    label = "Salary payment"

    def __init__(self, session: WorkbookSession) -> None:
        super().__init__(session, SalaryPaymentRepository(session))


class MaintenanceService(UnitScopedService):
    label = "Maintenance record"

    def __init__(self, session: WorkbookSession) -> None:
        super().__init__(session, MaintenanceRecordRepository(session))
