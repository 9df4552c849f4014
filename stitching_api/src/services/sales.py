from __future__ import annotations

import logging
from typing import Any, Dict

from src.db.models.sales import Customer, Order
from src.db.session import WorkbookSession
from src.repositories.production import ProductionUnitRepository
from src.repositories.sales import CustomerRepository, OrderRepository
from src.services.base import BaseService
from src.services.exceptions import ConflictError, InvalidReferenceError, NotFoundError
from src.services.gst import apply_gst_defaults
from src.services.production import require_unit

logger = logging.getLogger(__name__)


class SalesService(BaseService):
    """
    Domain service for customers and their stitching orders.

    Enforces unique order numbers, valid customer/unit references and refuses
    to delete customers that still have orders.
    """

    def __init__(self, session: WorkbookSession) -> None:
        super().__init__(session)
        self.customer_repo = CustomerRepository(session)
        self.order_repo = OrderRepository(session)
        self.unit_repo = ProductionUnitRepository(session)

    # PUBLIC_INTERFACE
    async def create_customer(self, values: Dict[str, Any]) -> Customer:
        customer = await self.customer_repo.create(values)
        logger.info("Created customer %s (%s)", customer.id, customer.name)
        return customer

    # PUBLIC_INTERFACE
    async def update_customer(self, customer_id: int, changes: Dict[str, Any]) -> Customer:
        customer = await self.customer_repo.update(customer_id, changes)
        if customer is None:
            raise NotFoundError(f"Customer {customer_id} not found")
        logger.info("Updated customer %s", customer_id)
        return customer

    # PUBLIC_INTERFACE
    async def delete_customer(self, customer_id: int) -> None:
        """
        Delete a customer.

        Raises:
            NotFoundError: unknown customer.
            ConflictError: the customer still has orders.
        """
        await self.session.run_sync(self._delete_customer, customer_id)

    def _delete_customer(self, customer_id: int) -> None:
        if self.customer_repo._get(customer_id) is None:
            raise NotFoundError(f"Customer {customer_id} not found")
        orders = self.order_repo._for_customer(customer_id)
        if orders:
            raise ConflictError(
                f"Customer {customer_id} has {len(orders)} order(s) and cannot be deleted",
                details={"order_ids": [o.id for o in orders]},
            )
        self.customer_repo._delete(customer_id)
        logger.info("Deleted customer %s", customer_id)

    # PUBLIC_INTERFACE
    async def create_order(self, values: Dict[str, Any]) -> Order:
        """Create an order after checking references and order number uniqueness."""
        return await self.session.run_sync(self._create_order, values)

    # PUBLIC_INTERFACE
    async def update_order(self, order_id: int, changes: Dict[str, Any]) -> Order:
        return await self.session.run_sync(self._update_order, order_id, changes)

    # PUBLIC_INTERFACE
    async def delete_order(self, order_id: int) -> None:
        if not await self.order_repo.delete(order_id):
            raise NotFoundError(f"Order {order_id} not found")
        logger.info("Deleted order %s", order_id)

    def _check_order_refs(self, values: Dict[str, Any]) -> None:
        if "customer_id" in values:
            customer_id = values["customer_id"]
            if customer_id is not None and self.customer_repo._get(customer_id) is None:
                raise InvalidReferenceError(
                    f"Customer {customer_id} does not exist",
                    details={"field": "customer_id", "value": customer_id},
                )
        if "production_unit_id" in values:
            require_unit(self.unit_repo, values["production_unit_id"])

    def _check_order_number(self, order_number: Any, order_id: Any = None) -> None:
        existing = self.order_repo._by_number(order_number)
        if existing is not None and existing.id != order_id:
            raise ConflictError(
                f"Order number {order_number!r} already exists",
                details={"field": "order_number", "value": order_number},
            )

    def _create_order(self, values: Dict[str, Any]) -> Order:
        self._check_order_refs(values)
        self._check_order_number(values.get("order_number"))
        values = apply_gst_defaults(values, amount_key="total_amount")
        order = self.order_repo._insert(values)
        logger.info("Created order %s (%s) for customer %s", order.id, order.order_number, order.customer_id)
        return order

    def _update_order(self, order_id: int, changes: Dict[str, Any]) -> Order:
        current = self.order_repo._get(order_id)
        if current is None:
            raise NotFoundError(f"Order {order_id} not found")
        self._check_order_refs(changes)
        if changes.get("order_number") is not None:
            self._check_order_number(changes["order_number"], order_id)
        changes = apply_gst_defaults(changes, amount_key="total_amount", current=current)
        updated = self.order_repo._update(order_id, changes)
        logger.info("Updated order %s", order_id)
        return updated
