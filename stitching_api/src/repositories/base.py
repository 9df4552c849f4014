from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Generic, List, Optional, Type, TypeVar

from src.db.base import Base
from src.db.session import WorkbookSession

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Base class for repositories over one workbook table.

    The `_`-prefixed methods are synchronous and must run inside
    `session.run_sync` (services compose several of them into one locked unit);
    the public coroutine methods wrap a single operation each.
    """

    model: ClassVar[Type[Base]]

    def __init__(self, session: WorkbookSession) -> None:
        self.session = session

    # ------------------------------------------------------------------
    # Synchronous primitives (caller holds the engine lock)
    # ------------------------------------------------------------------
    def _all(self) -> List[ModelT]:
        return self.session.all(self.model)  # type: ignore[return-value]

    def _save_all(self, records: List[ModelT]) -> None:
        self.session.replace(self.model, records)

    def _filter(self, predicate: Optional[Callable[[ModelT], bool]] = None) -> List[ModelT]:
        records = self._all()
        if predicate is None:
            return records
        return [r for r in records if predicate(r)]

    def _get(self, record_id: int) -> Optional[ModelT]:
        for record in self._all():
            if record.id == record_id:  # type: ignore[attr-defined]
                return record
        return None

    def _insert(self, values: Dict[str, Any]) -> ModelT:
        records = self._all()
        next_id = max((r.id for r in records), default=0) + 1  # type: ignore[attr-defined]
        record = self.model.model_validate({**values, "id": next_id})
        records.append(record)  # type: ignore[arg-type]
        self._save_all(records)
        return record  # type: ignore[return-value]

    def _insert_many(self, rows: List[Dict[str, Any]]) -> List[ModelT]:
        records = self._all()
        next_id = max((r.id for r in records), default=0) + 1  # type: ignore[attr-defined]
        created: List[ModelT] = []
        for offset, values in enumerate(rows):
            created.append(self.model.model_validate({**values, "id": next_id + offset}))  # type: ignore[arg-type]
        self._save_all(records + created)
        return created

    def _update(self, record_id: int, changes: Dict[str, Any]) -> Optional[ModelT]:
        records = self._all()
        for index, record in enumerate(records):
            if record.id == record_id:  # type: ignore[attr-defined]
                merged = {**record.model_dump(), **changes, "id": record_id}
                updated = self.model.model_validate(merged)
                records[index] = updated  # type: ignore[call-overload]
                self._save_all(records)
                return updated  # type: ignore[return-value]
        return None

    def _delete(self, record_id: int) -> bool:
        records = self._all()
        remaining = [r for r in records if r.id != record_id]  # type: ignore[attr-defined]
        if len(remaining) == len(records):
            return False
        self._save_all(remaining)
        return True

    # ------------------------------------------------------------------
    # Async API
    # ------------------------------------------------------------------
    async def list(self, *, limit: Optional[int] = None, offset: int = 0) -> List[ModelT]:
        """Return records in file order, optionally paginated."""
        records = await self.session.run_sync(self._all)
        return _paginate(records, limit, offset)

    async def list_where(
        self,
        predicate: Callable[[ModelT], bool],
        *,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[ModelT]:
        records = await self.session.run_sync(self._filter, predicate)
        return _paginate(records, limit, offset)

    async def get(self, record_id: int) -> Optional[ModelT]:
        return await self.session.run_sync(self._get, record_id)

    async def create(self, values: Dict[str, Any]) -> ModelT:
        return await self.session.run_sync(self._insert, values)

    async def update(self, record_id: int, changes: Dict[str, Any]) -> Optional[ModelT]:
        return await self.session.run_sync(self._update, record_id, changes)

    async def delete(self, record_id: int) -> bool:
        return await self.session.run_sync(self._delete, record_id)


def _paginate(records: list, limit: Optional[int], offset: int) -> list:
    if offset:
        records = records[offset:]
    if limit is not None:
        records = records[:limit]
    return records
