from __future__ import annotations

from typing import Optional

from src.db.models.security import User
from src.services.exceptions import ConflictError
from .base import BaseRepository


class SecurityRepository(BaseRepository[User]):
    """Repository for application users."""

    model = User

    def _by_username(self, username: str) -> Optional[User]:
        for user in self._all():
            if user.username == username:
                return user
        return None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await self.session.run_sync(self._by_username, username)

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        return await self.get(user_id)

    async def count_users(self) -> int:
        return len(await self.list())

    async def create_user(
        self,
        *,
        username: str,
        name: str,
        role: str,
        hashed_password: str,
    ) -> User:
        values = {"username": username, "name": name, "role": role, "hashed_password": hashed_password}
        return await self.session.run_sync(self._create_unique, values)

    def _create_unique(self, values: dict) -> User:
        if self._by_username(values["username"]) is not None:
            raise ConflictError(f"User {values['username']!r} already exists")
        return self._insert(values)
