from __future__ import annotations

import logging
import threading
from functools import partial
from pathlib import Path
from typing import AsyncGenerator, Callable, List, Optional, Type, TypeVar

from starlette.concurrency import run_in_threadpool

from .base import Base
from .config import Settings, get_settings
from .workbook import read_rows, write_rows

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
R = TypeVar("R")


class WorkbookEngine:
    """
    File-level access to the table workbooks in a data directory.

    Every read loads the whole file and every write replaces it. A single
    re-entrant lock serialises read-modify-write cycles within the process;
    there is no cross-process locking.
    """

    def __init__(self, data_dir: Path, reports_dir: Path) -> None:
        self.data_dir = Path(data_dir)
        self.reports_dir = Path(reports_dir)
        self.lock = threading.RLock()

    def path_for(self, model: Type[Base]) -> Path:
        return self.data_dir / f"{model.__tablename__}.xlsx"

    def ensure_table(self, model: Type[Base]) -> Path:
        """Create the workbook with its header row when it does not exist yet."""
        path = self.path_for(model)
        if not path.exists():
            logger.info("Creating %s", path.name)
            write_rows(path, model.columns(), [], sheet_name=model.__sheet_name__)
        return path

    def initialize(self, models: List[Type[Base]]) -> None:
        """Create the data/reports directories and every missing table workbook."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        with self.lock:
            for model in models:
                self.ensure_table(model)

    def load(self, model: Type[ModelT]) -> List[ModelT]:
        """Read all records of a table, skipping rows that fail validation."""
        path = self.ensure_table(model)
        records: List[ModelT] = []
        for line_no, row in enumerate(read_rows(path), start=2):
            try:
                records.append(model.model_validate(row))
            except ValueError:
                logger.exception("Skipping unreadable row %d in %s", line_no, path.name)
        return records

    def save(self, model: Type[ModelT], records: List[ModelT]) -> None:
        """Replace the whole table with the given records."""
        path = self.path_for(model)
        write_rows(path, model.columns(), [r.to_row() for r in records], sheet_name=model.__sheet_name__)


class WorkbookSession:
    """
    Unit of work over a WorkbookEngine.

    Synchronous helpers (`all`, `replace`) are meant to run inside `run_sync`,
    which executes the callable in the thread pool while holding the engine lock,
    so multi-table changes are applied without interleaving other writers.
    """

    def __init__(self, engine: WorkbookEngine) -> None:
        self.engine = engine

    def all(self, model: Type[ModelT]) -> List[ModelT]:
        return self.engine.load(model)

    def replace(self, model: Type[ModelT], records: List[ModelT]) -> None:
        self.engine.save(model, records)

    def _locked(self, fn: Callable[..., R]) -> R:
        with self.engine.lock:
            return fn()

    async def run_sync(self, fn: Callable[..., R], *args, **kwargs) -> R:
        """Run a blocking callable in the thread pool under the engine lock."""
        return await run_in_threadpool(self._locked, partial(fn, *args, **kwargs))


_ENGINE: Optional[WorkbookEngine] = None
_ENGINE_LOCK = threading.Lock()


def _build_engine(settings: Settings) -> WorkbookEngine:
    return WorkbookEngine(settings.data_path, settings.reports_path)


# PUBLIC_INTERFACE
def get_engine() -> WorkbookEngine:
    """Return the process-wide WorkbookEngine, creating it from settings on first use."""
    global _ENGINE
    if _ENGINE is None:
        with _ENGINE_LOCK:
            if _ENGINE is None:
                _ENGINE = _build_engine(get_settings())
    return _ENGINE


# PUBLIC_INTERFACE
def reset_engine() -> None:
    """Drop the cached engine so the next call re-reads settings (used by tests)."""
    global _ENGINE
    with _ENGINE_LOCK:
        _ENGINE = None


# PUBLIC_INTERFACE
async def get_session() -> AsyncGenerator[WorkbookSession, None]:
    """Yield a WorkbookSession suitable for FastAPI dependency injection."""
    yield WorkbookSession(get_engine())


__all__ = [
    "WorkbookEngine",
    "WorkbookSession",
    "get_engine",
    "reset_engine",
    "get_session",
]
