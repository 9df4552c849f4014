from __future__ import annotations

from typing import Optional

from pydantic import Field

from src.db.base import Base, IntPkMixin, Timestamp, utcnow


class MaintenanceRecord(IntPkMixin, Base):
    """Repair or service performed on a machine of a production unit."""
    __tablename__ = "maintenance_records"
    __sheet_name__ = "Maintenance Records"

    production_unit_id: int
    machine_id: Optional[str] = None
    machine_name: str
    maintenance_type: str
    description: str
    cost: float
    date: Timestamp = Field(default_factory=utcnow)
    next_maintenance_date: Optional[Timestamp] = None
    performed_by: Optional[str] = None
    notes: Optional[str] = None
