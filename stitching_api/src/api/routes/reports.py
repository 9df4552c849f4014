from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import FileResponse

from src.core.deps import require_auth_if_enabled
from src.db.session import WorkbookSession, get_session
from src.repositories.reports import ReportRepository
from src.schemas.reports import ReportGenerateRequest, ReportGenerateResponse, ReportRead
from src.services.reports import MEDIA_TYPES, ReportService

# PUBLIC_INTERFACE
router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
    dependencies=[Depends(require_auth_if_enabled)],
)

DOWNLOAD_PREFIX = "/api/v1/reports/download/"


# PUBLIC_INTERFACE
@router.get("", response_model=List[ReportRead], summary="List generated reports")
async def list_reports(session: WorkbookSession = Depends(get_session)) -> List[ReportRead]:
    records = await ReportRepository(session).list()
    return [ReportRead.model_validate(r) for r in records]


# PUBLIC_INTERFACE
@router.post(
    "/generate",
    response_model=ReportGenerateResponse,
    summary="Generate report",
    description=(
        "Build a report (production units, expenses, revenues, inventory, customers, orders, "
        "salary payments, maintenance records or a financial summary) as xlsx, csv or pdf."
    ),
)
async def generate_report(
    payload: ReportGenerateRequest,
    session: WorkbookSession = Depends(get_session),
) -> ReportGenerateResponse:
    """
    Generate a report file and record it.

    Returns:
        ReportGenerateResponse: file path, download URL and the stored report record.
    """
    report = await ReportService(session).generate(payload.type, payload.format)
    filename = report.file_path.replace("\\", "/").rsplit("/", 1)[-1]
    return ReportGenerateResponse(
        message="Report generated successfully",
        filepath=report.file_path,
        download_url=f"{DOWNLOAD_PREFIX}{filename}",
        report=ReportRead.model_validate(report),
    )


# PUBLIC_INTERFACE
@router.get(
    "/download/{filename}",
    summary="Download report file",
    response_description="File stream (XLSX/CSV/PDF)",
)
async def download_report(
    filename: str = Path(..., description="Bare file name as returned by /generate"),
    session: WorkbookSession = Depends(get_session),
) -> FileResponse:
    path = ReportService(session).resolve_download(filename)
    media_type = MEDIA_TYPES.get(path.suffix.lstrip(".").lower(), "application/octet-stream")
    return FileResponse(path, media_type=media_type, filename=path.name)


# PUBLIC_INTERFACE
@router.delete(
    "/{report_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete report",
    description="Remove the report record; the file is removed on a best-effort basis.",
)
async def delete_report(
    report_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> None:
    await ReportService(session).delete(report_id)
