from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ReportType = Literal[
    "production_units",
    "expenses",
    "revenues",
    "inventory",
    "customers",
    "orders",
    "salary_payments",
    "maintenance_records",
    "financial_summary",
]
ReportFormat = Literal["xlsx", "csv", "pdf"]


class ReportRead(BaseModel):
    """Read model for a generated report."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str
    format: str
    generated_at: datetime
    file_path: str


class ReportGenerateRequest(BaseModel):
    """Which report to build and in which file format."""
    type: ReportType = Field(..., description="Report type")
    format: ReportFormat = Field("xlsx", description="Output format")


class ReportGenerateResponse(BaseModel):
    """Location of a freshly generated report."""
    message: str
    filepath: str = Field(..., description="Path of the file on the server")
    download_url: str = Field(..., description="Relative URL that streams the file")
    report: ReportRead
