from __future__ import annotations

from typing import List, Optional

from src.db.models.sales import Customer, Order
from .base import BaseRepository


class CustomerRepository(BaseRepository[Customer]):
    """Repository for customers."""

    model = Customer

    async def list_customers(
        self, *, search: Optional[str] = None, limit: Optional[int] = None, offset: int = 0
    ) -> List[Customer]:
        if search:
            needle = search.lower()
            return await self.list_where(
                lambda c: needle in c.name.lower() or needle in (c.phone or ""),
                limit=limit,
                offset=offset,
            )
        return await self.list(limit=limit, offset=offset)


class OrderRepository(BaseRepository[Order]):
    """Repository for stitching orders."""

    model = Order

    async def list_orders(
        self,
        *,
        customer_id: Optional[int] = None,
        production_unit_id: Optional[int] = None,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Order]:
        def _match(o: Order) -> bool:
            if customer_id is not None and o.customer_id != customer_id:
                return False
            if production_unit_id is not None and o.production_unit_id != production_unit_id:
                return False
            if status and o.status != status:
                return False
            return True

        return await self.list_where(_match, limit=limit, offset=offset)

    def _by_number(self, order_number: str) -> Optional[Order]:
        for order in self._all():
            if order.order_number == order_number:
                return order
        return None

    def _for_customer(self, customer_id: int) -> List[Order]:
        return self._filter(lambda o: o.customer_id == customer_id)
