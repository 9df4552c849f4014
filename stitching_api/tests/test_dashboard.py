from datetime import datetime

import pytest

from src.services.dashboard import DashboardService, period_label, shift_month
from src.services.finance import FinanceService
from src.services.production import ProductionUnitService

NOW = datetime(2025, 3, 15, 12, 0)


def test_shift_month_crosses_years():
    assert shift_month((2025, 1), -1) == (2024, 12)
    assert shift_month((2024, 11), 3) == (2025, 2)
    assert period_label((2025, 1)) == "Jan 2025"


@pytest.fixture
async def seeded(session):
    units = ProductionUnitService(session)
    finance = FinanceService(session)
    unit = await units.create_unit({"name": "Main", "location": "Delhi"})
    await units.create_unit({"name": "Idle", "location": "Agra", "status": "inactive"})

    async def expense(amount, day):
        await finance.create_expense(
            {"production_unit_id": unit.id, "description": "e", "amount": amount, "category": "Rent", "date": day}
        )

    async def revenue(amount, day):
        await finance.create_revenue(
            {"production_unit_id": unit.id, "description": "r", "amount": amount, "category": "Consulting", "date": day}
        )

    await expense(2000, datetime(2025, 2, 10))
    await expense(3000, datetime(2025, 3, 1))
    await expense(500, datetime(2024, 12, 31))
    await revenue(4000, datetime(2025, 2, 20))
    await revenue(6000, datetime(2025, 3, 5))
    return unit


@pytest.mark.anyio
async def test_stats(session, seeded):
    stats = await DashboardService(session).stats(now=NOW)

    assert stats["monthly_cost"] == 3000
    assert stats["total_revenue"] == 10000
    assert stats["production_unit_count"] == 1
    assert stats["profit_margin"] == 45.0
    assert stats["cost_percent_change"] == 50.0
    assert stats["revenue_percent_change"] == 50.0
    # march 50% vs february 50%
    assert stats["profit_margin_change"] == 0.0


@pytest.mark.anyio
async def test_stats_without_data(session):
    stats = await DashboardService(session).stats(now=NOW)
    assert stats["profit_margin"] == 0
    assert stats["cost_percent_change"] == 0
    assert stats["production_unit_count"] == 0


@pytest.mark.anyio
async def test_cost_trends(session, seeded):
    trends = await DashboardService(session).cost_trends(months=4, now=NOW)
    assert trends == [
        {"period": "Dec 2024", "amount": 500},
        {"period": "Jan 2025", "amount": 0},
        {"period": "Feb 2025", "amount": 2000},
        {"period": "Mar 2025", "amount": 3000},
    ]


@pytest.mark.anyio
async def test_profit_loss(session, seeded):
    rows = await DashboardService(session).profit_loss(months=2, now=NOW)
    assert rows == [
        {"period": "Feb 2025", "revenue": 4000, "expenses": 2000, "profit": 2000},
        {"period": "Mar 2025", "revenue": 6000, "expenses": 3000, "profit": 3000},
    ]


@pytest.mark.anyio
async def test_recent_transactions(session, seeded):
    await ProductionUnitService(session).delete_unit(seeded.id)
    rows = await DashboardService(session).recent_transactions(limit=3)

    assert [(r["type"], r["amount"]) for r in rows] == [("revenue", 6000), ("expense", 3000), ("revenue", 4000)]
    assert {r["production_unit_name"] for r in rows} == {"Unknown"}


def test_dashboard_endpoints(client, unit):
    client.post(
        "/api/v1/expenses",
        json={"production_unit_id": unit["id"], "description": "Rent", "amount": 1000, "category": "Rent"},
    )
    stats = client.get("/api/v1/dashboard/stats").json()
    assert stats["monthly_cost"] == 1000
    assert stats["production_unit_count"] == 1
    assert stats["production_unit_change"] == 1

    assert len(client.get("/api/v1/dashboard/cost-trends").json()) == 12
    assert len(client.get("/api/v1/dashboard/profit-loss").json()) == 6
    transactions = client.get("/api/v1/dashboard/transactions", params={"limit": 5}).json()
    assert transactions[0]["production_unit_name"] == "Main Floor"
