"""
Seeding utilities.

Seeds:
- Default admin user (only when the users table is empty)
- Sample GST expenses/revenues against a sample production unit

Usage:
  python -m src.db.seed            # admin user + sample GST data
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from src.core.security import get_password_hash
from src.core.settings import AppSettings, get_app_settings
from src.db.models import ALL_MODELS
from src.db.session import WorkbookSession, get_engine
from src.repositories.production import ProductionUnitRepository
from src.repositories.security import SecurityRepository
from src.services.finance import FinanceService
from src.services.gst import sample_expenses, sample_revenues

logger = logging.getLogger(__name__)

SAMPLE_UNIT = {"name": "Sample Production Unit", "location": "Delhi, India", "status": "active"}


# PUBLIC_INTERFACE
async def seed_admin(session: WorkbookSession, settings: Optional[AppSettings] = None) -> bool:
    """
    Create the default admin user when no user exists.

    Returns:
        True when a user was created.
    """
    settings = settings or get_app_settings()
    repo = SecurityRepository(session)
    if await repo.count_users() > 0:
        return False
    await repo.create_user(
        username=settings.DEFAULT_ADMIN_USERNAME,
        name="Administrator",
        role="admin",
        hashed_password=get_password_hash(settings.DEFAULT_ADMIN_PASSWORD),
    )
    logger.info("Seeded default admin user %r", settings.DEFAULT_ADMIN_USERNAME)
    return True


# PUBLIC_INTERFACE
async def seed_sample_gst_data(session: WorkbookSession) -> Dict[str, Any]:
    """
    Add sample GST expenses and revenues.

    The first existing production unit is used; a sample unit is created when
    there is none. Expenses go through FinanceService so the unit's
    cost_to_date reflects them.
    """
    unit_repo = ProductionUnitRepository(session)
    units = await unit_repo.list(limit=1)
    unit = units[0] if units else await unit_repo.create(dict(SAMPLE_UNIT))

    finance = FinanceService(session)
    for values in sample_expenses(unit.id):
        await finance.create_expense(values)
    for values in sample_revenues(unit.id):
        await finance.create_revenue(values)

    result = {
        "expenses_added": len(sample_expenses(unit.id)),
        "revenues_added": len(sample_revenues(unit.id)),
        "production_unit_id": unit.id,
    }
    logger.info("Seeded sample GST data: %s", result)
    return result


# PUBLIC_INTERFACE
async def seed_all() -> None:
    """Initialise the data directory, then seed the admin user and sample GST data."""
    engine = get_engine()
    engine.initialize(ALL_MODELS)
    session = WorkbookSession(engine)
    await seed_admin(session)
    await seed_sample_gst_data(session)


if __name__ == "__main__":
    asyncio.run(seed_all())
