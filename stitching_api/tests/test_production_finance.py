def _expense(client, unit_id, amount, **extra):
    body = {"production_unit_id": unit_id, "description": "Thread", "amount": amount, "category": "Raw Materials"}
    body.update(extra)
    resp = client.post("/api/v1/expenses", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def _cost(client, unit_id):
    return client.get(f"/api/v1/production-units/{unit_id}").json()["cost_to_date"]


def test_health(client):
    resp = client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Healthy"
    assert resp.headers["X-Correlation-ID"]


def test_correlation_id_is_echoed(client):
    resp = client.get("/api/v1/health", headers={"X-Correlation-ID": "abc-123"})
    assert resp.headers["X-Correlation-ID"] == "abc-123"


def test_production_unit_crud(client, unit):
    assert unit["id"] == 1
    assert unit["status"] == "active"
    assert unit["cost_to_date"] == 0

    resp = client.put(f"/api/v1/production-units/{unit['id']}", json={"status": "maintenance"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "maintenance"
    assert resp.json()["name"] == "Main Floor"

    listed = client.get("/api/v1/production-units", params={"status": "maintenance"}).json()
    assert [u["id"] for u in listed] == [unit["id"]]
    assert client.get("/api/v1/production-units", params={"status": "active"}).json() == []

    assert client.delete(f"/api/v1/production-units/{unit['id']}").status_code == 204
    resp = client.get(f"/api/v1/production-units/{unit['id']}")
    assert resp.status_code == 404
    assert resp.json()["error"]["type"] == "not_found"


def test_cost_to_date_is_not_client_writable(client, unit):
    resp = client.put(f"/api/v1/production-units/{unit['id']}", json={"cost_to_date": 999})
    assert resp.status_code == 200
    assert resp.json()["cost_to_date"] == 0


def test_expense_lifecycle_keeps_unit_cost_in_sync(client, unit):
    other = client.post("/api/v1/production-units", json={"name": "Finishing", "location": "Tiruppur"}).json()

    e1 = _expense(client, unit["id"], 5900, gst_rate=18)
    _expense(client, unit["id"], 1000)
    assert _cost(client, unit["id"]) == 6900

    # gst split derived from the inclusive amount
    assert e1["base_amount"] == 5000
    assert e1["gst_amount"] == 900

    resp = client.put(f"/api/v1/expenses/{e1['id']}", json={"amount": 11800})
    assert resp.status_code == 200
    assert resp.json()["base_amount"] == 10000
    assert _cost(client, unit["id"]) == 12800

    client.put(f"/api/v1/expenses/{e1['id']}", json={"production_unit_id": other["id"]})
    assert _cost(client, unit["id"]) == 1000
    assert _cost(client, other["id"]) == 11800

    assert client.delete(f"/api/v1/expenses/{e1['id']}").status_code == 204
    assert _cost(client, other["id"]) == 0


def test_expense_requires_existing_unit(client):
    resp = client.post(
        "/api/v1/expenses",
        json={"production_unit_id": 42, "description": "x", "amount": 10, "category": "Rent"},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"]["type"] == "invalid_reference"
    assert body["error"]["details"]["field"] == "production_unit_id"
    assert client.get("/api/v1/expenses").json() == []


def test_expense_filter_by_unit(client, unit):
    other = client.post("/api/v1/production-units", json={"name": "B", "location": "C"}).json()
    _expense(client, unit["id"], 100, category="Rent")
    _expense(client, unit["id"], 200)
    _expense(client, other["id"], 300)
    by_unit = client.get("/api/v1/expenses", params={"production_unit_id": unit["id"]}).json()
    assert len(by_unit) == 2


def test_revenue_order_reference_is_checked(client, unit):
    body = {
        "production_unit_id": unit["id"],
        "description": "Blouse stitching",
        "amount": 1180,
        "category": "Service Fees",
        "gst_rate": 18,
        "order_id": 7,
    }
    resp = client.post("/api/v1/revenues", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"]["details"]["field"] == "order_id"

    body.pop("order_id")
    resp = client.post("/api/v1/revenues", json=body)
    assert resp.status_code == 201
    assert resp.json()["gst_amount"] == 180
    # revenues never touch cost_to_date
    assert _cost(client, unit["id"]) == 0


def test_validation_errors_use_envelope(client):
    resp = client.post("/api/v1/production-units", json={"location": "Nowhere"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["status"] == 400
    assert body["error"]["type"] == "validation_error"
    assert body["path"] == "/api/v1/production-units"
    assert body["method"] == "POST"
    assert body["correlation_id"]


def test_negative_amount_rejected(client, unit):
    resp = client.post(
        "/api/v1/expenses",
        json={"production_unit_id": unit["id"], "description": "x", "amount": -5, "category": "Rent"},
    )
    assert resp.status_code == 400


def test_inventory_total_value(client, unit):
    resp = client.post(
        "/api/v1/inventory",
        json={"name": "Cotton fabric", "quantity": 12.5, "unit_cost": 80, "production_unit_id": unit["id"]},
    )
    assert resp.status_code == 201
    item = resp.json()
    assert item["total_value"] == 1000

    updated = client.put(f"/api/v1/inventory/{item['id']}", json={"quantity": 2}).json()
    assert updated["total_value"] == 160


def test_inventory_unit_reference_checked(client):
    resp = client.post("/api/v1/inventory", json={"name": "Buttons", "unit_cost": 1, "production_unit_id": 9})
    assert resp.status_code == 400


def test_salary_payment_filters(client, unit):
    base = {"production_unit_id": unit["id"], "amount": 12000, "payment_method": "UPI"}
    client.post("/api/v1/salary-payments", json={**base, "employee_name": "Asha", "month": "January", "year": "2025"})
    client.post("/api/v1/salary-payments", json={**base, "employee_name": "Ravi", "month": "February", "year": "2025"})

    resp = client.get("/api/v1/salary-payments", params={"month": "January", "year": "2025"})
    assert resp.status_code == 200
    assert [p["employee_name"] for p in resp.json()] == ["Asha"]
    assert len(client.get("/api/v1/salary-payments", params={"year": "2025"}).json()) == 2


def test_maintenance_record(client, unit):
    resp = client.post(
        "/api/v1/maintenance-records",
        json={
            "production_unit_id": unit["id"],
            "machine_name": "Juki DDL-8700",
            "maintenance_type": "repair",
            "description": "Replaced needle bar",
            "cost": 1500,
            "next_maintenance_date": "2025-06-01T00:00:00",
        },
    )
    assert resp.status_code == 201, resp.text
    record = resp.json()
    assert record["machine_name"] == "Juki DDL-8700"
    assert client.get(f"/api/v1/maintenance-records/{record['id']}").status_code == 200
    # maintenance cost is not an expense
    assert _cost(client, unit["id"]) == 0
