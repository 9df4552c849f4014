from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class InventoryItemCreate(BaseModel):
    """Create payload for an inventory item."""
    name: str = Field(..., min_length=1, description="Item name")
    description: Optional[str] = Field(None)
    quantity: float = Field(0, ge=0, description="Quantity on hand")
    unit_cost: float = Field(..., ge=0, description="Cost per unit (INR)")
    production_unit_id: Optional[int] = Field(None, ge=1, description="Holding production unit")


class InventoryItemUpdate(BaseModel):
    """Partial update for an inventory item."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    quantity: Optional[float] = Field(None, ge=0)
    unit_cost: Optional[float] = Field(None, ge=0)
    production_unit_id: Optional[int] = Field(None, ge=1)


class InventoryItemRead(BaseModel):
    """Read model for an inventory item."""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Item ID")
    name: str
    description: Optional[str] = None
    quantity: float
    unit_cost: float
    production_unit_id: Optional[int] = None
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")

    @computed_field  # type: ignore[misc]
    @property
    def total_value(self) -> float:
        """quantity * unit_cost"""
        return round(self.quantity * self.unit_cost, 2)
