from __future__ import annotations

from typing import Optional

from src.db.models.reports import Report
from .base import BaseRepository


class ReportRepository(BaseRepository[Report]):
    """Repository for generated report records."""

    model = Report

    async def get_by_filename(self, filename: str) -> Optional[Report]:
        records = await self.list_where(lambda r: r.file_path.replace("\\", "/").rsplit("/", 1)[-1] == filename)
        return records[0] if records else None
