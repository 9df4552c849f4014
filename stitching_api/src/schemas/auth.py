from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TokenPair(BaseModel):
    """Access and refresh tokens."""
    token_type: str = Field("bearer", description="Token type, typically 'bearer'")
    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")


class RefreshRequest(BaseModel):
    """Request to refresh an access token."""
    refresh_token: str = Field(..., description="Refresh token")


class UserRead(BaseModel):
    """User read model (never exposes the password hash)."""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Login name")
    name: str = Field(..., description="Display name")
    role: str = Field(..., description="Role, e.g. 'admin' or 'Financial Manager'")


class UserCreate(BaseModel):
    """Admin create user payload."""
    username: str = Field(..., min_length=1, description="Unique login name")
    password: str = Field(..., min_length=4, description="Password")
    name: str = Field(..., min_length=1)
    role: str = Field("user", min_length=1)


class UserUpdate(BaseModel):
    """Admin update user payload."""
    password: Optional[str] = Field(None, min_length=4)
    name: Optional[str] = Field(None, min_length=1)
    role: Optional[str] = Field(None, min_length=1)
