from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductionUnitCreate(BaseModel):
    """Create payload for a production unit. cost_to_date is maintained by the server."""
    name: str = Field(..., min_length=1, description="Unit name")
    location: str = Field(..., min_length=1, description="Where the unit operates")
    status: str = Field("active", description="Unit status, e.g. active / inactive / maintenance")


class ProductionUnitUpdate(BaseModel):
    """Partial update for a production unit."""
    name: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    status: Optional[str] = Field(None)


class ProductionUnitRead(BaseModel):
    """Read model for a production unit."""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Production unit ID")
    name: str = Field(..., description="Unit name")
    location: str = Field(..., description="Location")
    status: str = Field(..., description="Status")
    cost_to_date: float = Field(..., description="Sum of all expense amounts booked against the unit")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
