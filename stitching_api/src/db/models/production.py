from __future__ import annotations

from pydantic import Field

from src.db.base import Base, IntPkMixin, Timestamp, utcnow


class ProductionUnit(IntPkMixin, Base):
    """Stitching/production site that accrues cost."""
    __tablename__ = "production_units"
    __sheet_name__ = "Production Units"

    name: str
    location: str
    status: str = "active"
    cost_to_date: float = 0.0
    created_at: Timestamp = Field(default_factory=utcnow)
