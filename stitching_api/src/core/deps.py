from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from src.core.security import decode_token
from src.core.settings import get_app_settings
from src.db.models.security import User
from src.db.session import WorkbookSession, get_session
from src.repositories.security import SecurityRepository

logger = logging.getLogger(__name__)

# OAuth2 bearer (used by docs); login endpoint path referenced here.
# auto_error is off so routers can run open when AUTH_REQUIRED is disabled.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# PUBLIC_INTERFACE
async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    session: WorkbookSession = Depends(get_session),
) -> User:
    """
    Resolve and return the current user from the Authorization bearer token.

    Raises:
        HTTPException: 401 when the token is missing, invalid, not an access
        token, or names a user that no longer exists.
    """
    if not token:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_token(token)
    except JWTError:
        raise _unauthorized("Invalid token")

    if payload.get("type") != "access":
        raise _unauthorized("Invalid token type")

    user_id = payload.get("sub")
    try:
        user_pk = int(user_id)
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token")

    repo = SecurityRepository(session)
    user = await repo.get_user_by_id(user_pk)
    if not user:
        raise _unauthorized("User not found")
    return user


# PUBLIC_INTERFACE
async def get_current_active_user(user: User = Depends(get_current_user)) -> User:
    """Return the authenticated user (users have no inactive state; kept as the dependency seam)."""
    return user


# PUBLIC_INTERFACE
async def require_auth_if_enabled(
    token: Optional[str] = Depends(oauth2_scheme),
    session: WorkbookSession = Depends(get_session),
) -> Optional[User]:
    """
    Router-level guard for business endpoints.

    When AUTH_REQUIRED is off the request passes through anonymously; otherwise
    the bearer token is validated exactly like get_current_user.
    """
    if not get_app_settings().AUTH_REQUIRED:
        return None
    return await get_current_user(token=token, session=session)


# PUBLIC_INTERFACE
def require_roles(*required: str):
    """
    Create a dependency that requires the current user to have one of the specified roles.
    """

    async def _dep(user: User = Depends(get_current_active_user)) -> User:
        if user.role not in set(required):
            logger.info("User %s denied; role %r not in %s", user.username, user.role, sorted(required))
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
        return user

    return _dep
