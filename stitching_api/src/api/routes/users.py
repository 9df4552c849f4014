from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, Query, status

from src.core.deps import require_roles
from src.core.security import get_password_hash
from src.db.models.security import User
from src.db.session import WorkbookSession, get_session
from src.repositories.security import SecurityRepository
from src.schemas.auth import UserCreate, UserRead, UserUpdate
from src.services.exceptions import ConflictError, NotFoundError

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(require_roles("admin"))],
)


# PUBLIC_INTERFACE
@router.get("", response_model=List[UserRead], summary="List users", description="List users. Requires admin role.")
async def list_users(
    session: WorkbookSession = Depends(get_session),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[UserRead]:
    items = await SecurityRepository(session).list(limit=limit, offset=offset)
    return [UserRead.model_validate(u) for u in items]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Create a user. Usernames are unique (409 on duplicates).",
)
async def create_user(
    payload: UserCreate,
    session: WorkbookSession = Depends(get_session),
) -> UserRead:
    user = await SecurityRepository(session).create_user(
        username=payload.username,
        name=payload.name,
        role=payload.role,
        hashed_password=get_password_hash(payload.password),
    )
    return UserRead.model_validate(user)


# PUBLIC_INTERFACE
@router.get("/{user_id}", response_model=UserRead, summary="Get user")
async def get_user(
    user_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> UserRead:
    user = await SecurityRepository(session).get_user_by_id(user_id)
    if not user:
        raise NotFoundError(f"User {user_id} not found")
    return UserRead.model_validate(user)


# PUBLIC_INTERFACE
@router.put("/{user_id}", response_model=UserRead, summary="Update user")
async def update_user(
    payload: UserUpdate,
    user_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> UserRead:
    changes = payload.model_dump(exclude_unset=True, exclude={"password"})
    if payload.password:
        changes["hashed_password"] = get_password_hash(payload.password)
    updated = await SecurityRepository(session).update(user_id, changes)
    if not updated:
        raise NotFoundError(f"User {user_id} not found")
    return UserRead.model_validate(updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
    description="Delete a user. Administrators cannot delete their own account.",
)
async def delete_user(
    user_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
    current: User = Depends(require_roles("admin")),
) -> None:
    if current.id == user_id:
        raise ConflictError("You cannot delete your own account")
    if not await SecurityRepository(session).delete(user_id):
        raise NotFoundError(f"User {user_id} not found")
