from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from src.core.deps import require_auth_if_enabled
from src.db.session import WorkbookSession, get_session
from src.repositories.inventory import InventoryItemRepository
from src.schemas.inventory import InventoryItemCreate, InventoryItemRead, InventoryItemUpdate
from src.services.exceptions import NotFoundError
from src.services.operations import InventoryService

router = APIRouter(
    prefix="/inventory",
    tags=["Inventory"],
    dependencies=[Depends(require_auth_if_enabled)],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[InventoryItemRead],
    summary="List inventory items",
    description="List inventory items with their total value (quantity * unit cost).",
)
async def list_inventory_items(
    session: WorkbookSession = Depends(get_session),
    production_unit_id: Optional[int] = Query(None, ge=1, description="Filter by holding unit"),
    limit: int = Query(1000, ge=1, le=10000, description="Max records"),
    offset: int = Query(0, ge=0, description="Records to skip"),
) -> List[InventoryItemRead]:
    """
    Return inventory items.

    Optionally filter by production_unit_id.
    """
    repo = InventoryItemRepository(session)
    items = await repo.list_items(production_unit_id=production_unit_id, limit=limit, offset=offset)
    return [InventoryItemRead.model_validate(x) for x in items]


# PUBLIC_INTERFACE
@router.get("/{item_id}", response_model=InventoryItemRead, summary="Get inventory item")
async def get_inventory_item(
    item_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> InventoryItemRead:
    item = await InventoryItemRepository(session).get(item_id)
    if not item:
        raise NotFoundError(f"Inventory item {item_id} not found")
    return InventoryItemRead.model_validate(item)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=InventoryItemRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create inventory item",
)
async def create_inventory_item(
    payload: InventoryItemCreate,
    session: WorkbookSession = Depends(get_session),
) -> InventoryItemRead:
    item = await InventoryService(session).create(payload.model_dump())
    return InventoryItemRead.model_validate(item)


# PUBLIC_INTERFACE
@router.put("/{item_id}", response_model=InventoryItemRead, summary="Update inventory item")
async def update_inventory_item(
    payload: InventoryItemUpdate,
    item_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> InventoryItemRead:
    item = await InventoryService(session).update(item_id, payload.model_dump(exclude_unset=True))
    return InventoryItemRead.model_validate(item)


# PUBLIC_INTERFACE
@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete inventory item")
async def delete_inventory_item(
    item_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> None:
    await InventoryService(session).delete(item_id)
