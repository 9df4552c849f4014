from __future__ import annotations

import io
from typing import Any, Dict, List

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from src.db.models import ALL_MODELS
from src.db.session import WorkbookSession, get_engine, reset_engine


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point storage at a fresh temporary directory for each test."""
    path = tmp_path / "data"
    monkeypatch.setenv("DATA_DIR", str(path))
    monkeypatch.delenv("REPORTS_DIR", raising=False)
    monkeypatch.setenv("AUTH_REQUIRED", "false")
    monkeypatch.setenv("SEED_ADMIN", "true")
    monkeypatch.setenv("AUTO_SEED_SAMPLE_DATA", "false")
    monkeypatch.setenv("DEFAULT_ADMIN_PASSWORD", "admin")
    monkeypatch.setenv("JWT_SECRET_KEY", "test-secret")
    reset_engine()
    yield path
    reset_engine()


@pytest.fixture
def session(data_dir) -> WorkbookSession:
    engine = get_engine()
    engine.initialize(ALL_MODELS)
    return WorkbookSession(engine)


@pytest.fixture
def client(data_dir):
    from src.api.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def unit(client) -> Dict[str, Any]:
    resp = client.post("/api/v1/production-units", json={"name": "Main Floor", "location": "Ludhiana"})
    assert resp.status_code == 201, resp.text
    return resp.json()


def xlsx_bytes(rows: List[Dict[str, Any]], columns: List[str] | None = None) -> bytes:
    """Build an in-memory workbook with a header row and the given rows."""
    buffer = io.BytesIO()
    pd.DataFrame(rows, columns=columns).to_excel(buffer, index=False, engine="openpyxl")
    return buffer.getvalue()
