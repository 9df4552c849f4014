from __future__ import annotations

from src.db.base import Base, IntPkMixin


class User(IntPkMixin, Base):
    """Application user; the password column holds a passlib hash."""
    __tablename__ = "users"
    __sheet_name__ = "Users"

    username: str
    hashed_password: str
    name: str
    role: str
