from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from src.core.deps import require_auth_if_enabled
from src.db.session import WorkbookSession, get_session
from src.repositories.maintenance import MaintenanceRecordRepository
from src.schemas.maintenance import MaintenanceRecordCreate, MaintenanceRecordRead, MaintenanceRecordUpdate
from src.services.exceptions import NotFoundError
from src.services.operations import MaintenanceService

router = APIRouter(
    prefix="/maintenance-records",
    tags=["Maintenance"],
    dependencies=[Depends(require_auth_if_enabled)],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[MaintenanceRecordRead],
    summary="List maintenance records",
    description="List machine maintenance records, optionally for one production unit.",
)
async def list_maintenance_records(
    session: WorkbookSession = Depends(get_session),
    production_unit_id: Optional[int] = Query(None, ge=1),
    limit: int = Query(1000, ge=1, le=10000),
    offset: int = Query(0, ge=0),
) -> List[MaintenanceRecordRead]:
    repo = MaintenanceRecordRepository(session)
    records = await repo.list_records(production_unit_id=production_unit_id, limit=limit, offset=offset)
    return [MaintenanceRecordRead.model_validate(r) for r in records]


# PUBLIC_INTERFACE
@router.get("/{record_id}", response_model=MaintenanceRecordRead, summary="Get maintenance record")
async def get_maintenance_record(
    record_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> MaintenanceRecordRead:
    record = await MaintenanceRecordRepository(session).get(record_id)
    if not record:
        raise NotFoundError(f"Maintenance record {record_id} not found")
    return MaintenanceRecordRead.model_validate(record)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=MaintenanceRecordRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create maintenance record",
)
async def create_maintenance_record(
    payload: MaintenanceRecordCreate,
    session: WorkbookSession = Depends(get_session),
) -> MaintenanceRecordRead:
    record = await MaintenanceService(session).create(payload.model_dump())
    return MaintenanceRecordRead.model_validate(record)


# PUBLIC_INTERFACE
@router.put("/{record_id}", response_model=MaintenanceRecordRead, summary="Update maintenance record")
async def update_maintenance_record(
    payload: MaintenanceRecordUpdate,
    record_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> MaintenanceRecordRead:
    record = await MaintenanceService(session).update(record_id, payload.model_dump(exclude_unset=True))
    return MaintenanceRecordRead.model_validate(record)


# PUBLIC_INTERFACE
@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete maintenance record")
async def delete_maintenance_record(
    record_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> None:
    await MaintenanceService(session).delete(record_id)
