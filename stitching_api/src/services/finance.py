from __future__ import annotations

import logging
from typing import Any, Dict

from src.db.models.finance import Expense, Revenue
from src.db.session import WorkbookSession
from src.repositories.finance import ExpenseRepository, RevenueRepository
from src.repositories.production import ProductionUnitRepository
from src.repositories.sales import OrderRepository
from src.services.base import BaseService
from src.services.exceptions import InvalidReferenceError, NotFoundError
from src.services.gst import apply_gst_defaults
from src.services.production import require_unit

logger = logging.getLogger(__name__)


class FinanceService(BaseService):
    """
    Domain service for expenses and revenues.

    Expenses drive each production unit's cost_to_date: the unit total always
    equals the sum of its expense amounts, whichever way expenses are created
    (API, import, sample data), changed or removed. Each operation runs as a
    single locked unit so the expense and unit tables never disagree.
    """

    def __init__(self, session: WorkbookSession) -> None:
        super().__init__(session)
        self.unit_repo = ProductionUnitRepository(session)
        self.expense_repo = ExpenseRepository(session)
        self.revenue_repo = RevenueRepository(session)
        self.order_repo = OrderRepository(session)

    # ------------------------------------------------------------------
    # Expenses
    # ------------------------------------------------------------------
    # PUBLIC_INTERFACE
    async def create_expense(self, values: Dict[str, Any]) -> Expense:
        """Create an expense and add its amount to the unit's cost_to_date."""
        return await self.session.run_sync(self._create_expense, values)

    # PUBLIC_INTERFACE
    async def update_expense(self, expense_id: int, changes: Dict[str, Any]) -> Expense:
        """Update an expense, moving or adjusting the unit cost it contributes."""
        return await self.session.run_sync(self._update_expense, expense_id, changes)

    # PUBLIC_INTERFACE
    async def delete_expense(self, expense_id: int) -> None:
        """Delete an expense and subtract its amount from the unit's cost_to_date."""
        await self.session.run_sync(self._delete_expense, expense_id)

    def _create_expense(self, values: Dict[str, Any]) -> Expense:
        values = apply_gst_defaults(values)
        require_unit(self.unit_repo, values.get("production_unit_id"))
        expense = self.expense_repo._insert(values)
        self.unit_repo._adjust_cost(expense.production_unit_id, expense.amount)
        logger.info(
            "Created expense %s (%.2f) for unit %s", expense.id, expense.amount, expense.production_unit_id
        )
        return expense

    def _update_expense(self, expense_id: int, changes: Dict[str, Any]) -> Expense:
        current = self.expense_repo._get(expense_id)
        if current is None:
            raise NotFoundError(f"Expense {expense_id} not found")
        if "production_unit_id" in changes:
            require_unit(self.unit_repo, changes["production_unit_id"])
        changes = apply_gst_defaults(changes, current=current)

        updated = self.expense_repo._update(expense_id, changes)
        if updated.production_unit_id != current.production_unit_id:
            self.unit_repo._adjust_cost(current.production_unit_id, -current.amount)
            self.unit_repo._adjust_cost(updated.production_unit_id, updated.amount)
        elif updated.amount != current.amount:
            self.unit_repo._adjust_cost(updated.production_unit_id, updated.amount - current.amount)
        logger.info("Updated expense %s", expense_id)
        return updated

    def _delete_expense(self, expense_id: int) -> None:
        current = self.expense_repo._get(expense_id)
        if current is None:
            raise NotFoundError(f"Expense {expense_id} not found")
        self.expense_repo._delete(expense_id)
        self.unit_repo._adjust_cost(current.production_unit_id, -current.amount)
        logger.info("Deleted expense %s", expense_id)

    # ------------------------------------------------------------------
    # Revenues
    # ------------------------------------------------------------------
    # PUBLIC_INTERFACE
    async def create_revenue(self, values: Dict[str, Any]) -> Revenue:
        """Create a revenue after checking its production unit and optional order."""
        return await self.session.run_sync(self._create_revenue, values)

    # PUBLIC_INTERFACE
    async def update_revenue(self, revenue_id: int, changes: Dict[str, Any]) -> Revenue:
        return await self.session.run_sync(self._update_revenue, revenue_id, changes)

    # PUBLIC_INTERFACE
    async def delete_revenue(self, revenue_id: int) -> None:
        if not await self.revenue_repo.delete(revenue_id):
            raise NotFoundError(f"Revenue {revenue_id} not found")
        logger.info("Deleted revenue %s", revenue_id)

    def _check_revenue_refs(self, values: Dict[str, Any]) -> None:
        if "production_unit_id" in values:
            require_unit(self.unit_repo, values["production_unit_id"])
        order_id = values.get("order_id")
        if order_id is not None and self.order_repo._get(order_id) is None:
            raise InvalidReferenceError(
                f"Order {order_id} does not exist", details={"field": "order_id", "value": order_id}
            )

    def _create_revenue(self, values: Dict[str, Any]) -> Revenue:
        values = apply_gst_defaults(values)
        self._check_revenue_refs(values)
        revenue = self.revenue_repo._insert(values)
        logger.info(
            "Created revenue %s (%.2f) for unit %s", revenue.id, revenue.amount, revenue.production_unit_id
        )
        return revenue

    def _update_revenue(self, revenue_id: int, changes: Dict[str, Any]) -> Revenue:
        current = self.revenue_repo._get(revenue_id)
        if current is None:
            raise NotFoundError(f"Revenue {revenue_id} not found")
        self._check_revenue_refs(changes)
        changes = apply_gst_defaults(changes, current=current)
        updated = self.revenue_repo._update(revenue_id, changes)
        logger.info("Updated revenue %s", revenue_id)
        return updated
