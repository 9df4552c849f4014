from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from src.core.deps import require_auth_if_enabled
from src.db.session import WorkbookSession, get_session
from src.repositories.production import ProductionUnitRepository
from src.schemas.production import ProductionUnitCreate, ProductionUnitRead, ProductionUnitUpdate
from src.services.exceptions import NotFoundError
from src.services.production import ProductionUnitService

router = APIRouter(
    prefix="/production-units",
    tags=["Production Units"],
    dependencies=[Depends(require_auth_if_enabled)],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[ProductionUnitRead],
    summary="List production units",
    description="List production units in file order, optionally filtered by status.",
)
async def list_production_units(
    session: WorkbookSession = Depends(get_session),
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    limit: int = Query(1000, ge=1, le=10000, description="Max records"),
    offset: int = Query(0, ge=0, description="Records to skip"),
) -> List[ProductionUnitRead]:
    """Return production units."""
    repo = ProductionUnitRepository(session)
    units = await repo.list_units(status=status_filter, limit=limit, offset=offset)
    return [ProductionUnitRead.model_validate(u) for u in units]


# PUBLIC_INTERFACE
@router.get("/{unit_id}", response_model=ProductionUnitRead, summary="Get production unit")
async def get_production_unit(
    unit_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> ProductionUnitRead:
    unit = await ProductionUnitRepository(session).get(unit_id)
    if not unit:
        raise NotFoundError(f"Production unit {unit_id} not found")
    return ProductionUnitRead.model_validate(unit)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=ProductionUnitRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create production unit",
    description="Create a production unit. cost_to_date starts at 0 and is maintained from expenses.",
)
async def create_production_unit(
    payload: ProductionUnitCreate,
    session: WorkbookSession = Depends(get_session),
) -> ProductionUnitRead:
    unit = await ProductionUnitService(session).create_unit(payload.model_dump())
    return ProductionUnitRead.model_validate(unit)


# PUBLIC_INTERFACE
@router.put("/{unit_id}", response_model=ProductionUnitRead, summary="Update production unit")
async def update_production_unit(
    payload: ProductionUnitUpdate,
    unit_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> ProductionUnitRead:
    """Partial update: only fields present in the body are changed."""
    unit = await ProductionUnitService(session).update_unit(unit_id, payload.model_dump(exclude_unset=True))
    return ProductionUnitRead.model_validate(unit)


# PUBLIC_INTERFACE
@router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete production unit")
async def delete_production_unit(
    unit_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> None:
    await ProductionUnitService(session).delete_unit(unit_id)
