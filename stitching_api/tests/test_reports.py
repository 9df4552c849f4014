from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

from src.db.workbook import read_frame
from src.services.exceptions import NotFoundError, ServiceError
from src.services.finance import FinanceService
from src.services.production import ProductionUnitService
from src.services.reports import ReportService


def test_generate_download_delete(client, unit):
    client.post(
        "/api/v1/expenses",
        json={"production_unit_id": unit["id"], "description": "Needles", "amount": 250, "category": "Raw Materials"},
    )
    resp = client.post("/api/v1/reports/generate", json={"type": "expenses"})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    report = body["report"]
    assert report["type"] == "expenses"
    assert report["format"] == "xlsx"
    assert report["name"].startswith("Expenses Report - ")
    assert body["download_url"].startswith("/api/v1/reports/download/expenses_")
    assert Path(body["filepath"]).is_file()

    download = client.get(body["download_url"])
    assert download.status_code == 200
    df = read_frame(download.content)
    assert df.loc[0, "Description"] == "Needles"
    assert df.loc[0, "Production Unit"] == "Main Floor"

    listed = client.get("/api/v1/reports").json()
    assert [r["id"] for r in listed] == [report["id"]]

    assert client.delete(f"/api/v1/reports/{report['id']}").status_code == 204
    assert not Path(body["filepath"]).exists()
    assert client.get("/api/v1/reports").json() == []
    assert client.get(body["download_url"]).status_code == 404
    assert client.delete(f"/api/v1/reports/{report['id']}").status_code == 404


@pytest.mark.parametrize("fmt, media", [("csv", "text/csv"), ("pdf", "application/pdf")])
def test_other_formats(client, unit, fmt, media):
    body = client.post("/api/v1/reports/generate", json={"type": "production_units", "format": fmt}).json()
    assert body["filepath"].endswith(f".{fmt}")
    download = client.get(body["download_url"])
    assert download.status_code == 200
    assert download.headers["content-type"].startswith(media)
    if fmt == "pdf":
        assert download.content.startswith(b"%PDF")
    else:
        assert "Main Floor" in download.text


def test_unknown_report_type(client):
    resp = client.post("/api/v1/reports/generate", json={"type": "payroll"})
    assert resp.status_code == 400


def test_download_rejects_path_components(client):
    resp = client.get("/api/v1/reports/download/..%5Csecrets.xlsx")
    assert resp.status_code == 400


def test_resolve_download(session):
    service = ReportService(session)
    for name in ("..", "a/b.xlsx", "a\\b.xlsx", ""):
        with pytest.raises(ServiceError):
            service.resolve_download(name)
    with pytest.raises(NotFoundError):
        service.resolve_download("missing.xlsx")


@pytest.mark.anyio
async def test_financial_summary(session):
    unit = await ProductionUnitService(session).create_unit({"name": "Main", "location": "Delhi"})
    finance = FinanceService(session)
    await finance.create_expense(
        {"production_unit_id": unit.id, "description": "Cloth", "amount": 59000, "category": "Raw Materials"}
    )
    await finance.create_revenue(
        {"production_unit_id": unit.id, "description": "Sale", "amount": 118000, "category": "Product Sales"}
    )

    report = await ReportService(session).generate("financial_summary", "csv", now=datetime(2025, 3, 1, 9, 30))

    assert Path(report.file_path).name == "financial_summary_2025-03-01T09-30-00-000000.csv"
    df = pd.read_csv(report.file_path)
    summary = dict(zip(df["Metric"], df["Value"]))
    assert summary["Total Revenue"] == "₹1,18,000.00"
    assert summary["Total Expenses"] == "₹59,000.00"
    assert summary["Profit"] == "₹59,000.00"
    assert summary["Profit Margin"] == "50.00%"


@pytest.mark.anyio
async def test_failed_record_leaves_no_file(session, monkeypatch):
    service = ReportService(session)

    def broken_insert(values):
        raise RuntimeError("disk full")

    monkeypatch.setattr(service.report_repo, "_insert", broken_insert)
    with pytest.raises(RuntimeError):
        await service.generate("customers", "csv")

    assert list(Path(session.engine.reports_dir).iterdir()) == []
