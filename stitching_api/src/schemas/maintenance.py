from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MaintenanceRecordCreate(BaseModel):
    """Create payload for a machine maintenance record."""
    production_unit_id: int = Field(..., ge=1)
    machine_id: Optional[str] = None
    machine_name: str = Field(..., min_length=1)
    maintenance_type: str = Field(..., min_length=1, description="e.g. preventive, repair")
    description: str = Field(..., min_length=1)
    cost: float = Field(..., ge=0)
    date: Optional[datetime] = Field(None, description="Defaults to now")
    next_maintenance_date: Optional[datetime] = None
    performed_by: Optional[str] = None
    notes: Optional[str] = None


class MaintenanceRecordUpdate(BaseModel):
    """Partial update for a maintenance record."""
    production_unit_id: Optional[int] = Field(None, ge=1)
    machine_id: Optional[str] = None
    machine_name: Optional[str] = Field(None, min_length=1)
    maintenance_type: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    cost: Optional[float] = Field(None, ge=0)
    date: Optional[datetime] = None
    next_maintenance_date: Optional[datetime] = None
    performed_by: Optional[str] = None
    notes: Optional[str] = None


class MaintenanceRecordRead(BaseModel):
    """Read model for a maintenance record."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    production_unit_id: int
    machine_id: Optional[str] = None
    machine_name: str
    maintenance_type: str
    description: str
    cost: float
    date: datetime
    next_maintenance_date: Optional[datetime] = None
    performed_by: Optional[str] = None
    notes: Optional[str] = None
