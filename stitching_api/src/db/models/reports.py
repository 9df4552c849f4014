from __future__ import annotations

from pydantic import Field

from src.db.base import Base, IntPkMixin, Timestamp, utcnow


class Report(IntPkMixin, Base):
    """Generated report file on disk."""
    __tablename__ = "reports"
    __sheet_name__ = "Reports"

    name: str
    type: str
    format: str = "xlsx"
    generated_at: Timestamp = Field(default_factory=utcnow)
    file_path: str
