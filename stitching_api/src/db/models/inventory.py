from __future__ import annotations

from typing import Optional

from pydantic import Field

from src.db.base import Base, IntPkMixin, Timestamp, utcnow


class InventoryItem(IntPkMixin, Base):
    """Stock item (fabric, thread, trims...) optionally held by a production unit."""
    __tablename__ = "inventory"
    __sheet_name__ = "Inventory"

    name: str
    description: Optional[str] = None
    quantity: float = 0.0
    unit_cost: float
    production_unit_id: Optional[int] = None
    created_at: Timestamp = Field(default_factory=utcnow)
