from __future__ import annotations

from src.db.session import WorkbookSession


class BaseService:
    """
    Shared parent of the domain services.

    A service owns the repositories it needs, all built on one WorkbookSession.
    Public coroutines hand a private `_`-prefixed method to `session.run_sync`;
    that method may read and rewrite several workbooks, and the whole call runs
    under the engine lock in a worker thread.
    """

    def __init__(self, session: WorkbookSession) -> None:
        self.session = session
