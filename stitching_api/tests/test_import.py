from conftest import xlsx_bytes


def _upload(client, import_type, content, filename="data.xlsx"):
    return client.post(
        "/api/v1/import",
        data={"type": import_type},
        files={"file": (filename, content, "application/octet-stream")},
    )


def test_import_production_units(client):
    content = xlsx_bytes(
        [
            {"name": "Unit A", "location": "Noida", "status": "active"},
            {"name": "Unit B", "location": "Jaipur", "status": "inactive"},
        ]
    )
    resp = _upload(client, "production_units", content)
    assert resp.status_code == 200, resp.text
    assert resp.json()["message"] == "Successfully imported 2 records"
    units = client.get("/api/v1/production-units").json()
    assert [u["name"] for u in units] == ["Unit A", "Unit B"]
    assert all(u["cost_to_date"] == 0 for u in units)


def test_camel_case_headers_and_unit_cost(client, unit):
    content = xlsx_bytes(
        [
            {"productionUnitId": unit["id"], "description": "Fabric", "amount": 10500, "category": "Raw Materials", "gstRate": 5},
            {"productionUnitId": unit["id"], "description": "Power", "amount": 1180, "category": "Utilities"},
        ]
    )
    resp = _upload(client, "expenses", content)
    assert resp.status_code == 200, resp.text

    expenses = client.get("/api/v1/expenses").json()
    assert expenses[0]["gst_amount"] == 500
    assert expenses[1]["gst_rate"] is None
    assert client.get(f"/api/v1/production-units/{unit['id']}").json()["cost_to_date"] == 11680


def test_csv_upload(client):
    resp = _upload(client, "customers", b"Name,Phone\nRekha,9000000001\nSunil,\n", filename="c.csv")
    assert resp.status_code == 200, resp.text
    customers = client.get("/api/v1/customers").json()
    assert [c["name"] for c in customers] == ["Rekha", "Sunil"]
    assert customers[0]["phone"] == "9000000001"


def test_missing_columns_are_named(client):
    content = xlsx_bytes([{"name": "Scissors", "quantity": 3}])
    resp = _upload(client, "inventory", content)
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"]["type"] == "import_error"
    assert "unit_cost" in body["error"]["message"]
    assert body["error"]["details"]["missing"] == ["unit_cost"]


def test_header_only_file_rejected(client):
    content = xlsx_bytes([], columns=["name"])
    resp = _upload(client, "customers", content)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "File contains no data rows"


def test_bad_row_rejects_whole_file(client):
    content = xlsx_bytes(
        [
            {"name": "Thread", "quantity": 10, "unit_cost": 5},
            {"name": "Needles", "quantity": 4, "unit_cost": "cheap"},
        ]
    )
    resp = _upload(client, "inventory", content)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"].startswith("Row 3:")
    assert client.get("/api/v1/inventory").json() == []


def test_unknown_unit_reference_rejected(client, unit):
    content = xlsx_bytes(
        [{"production_unit_id": 77, "description": "Sale", "amount": 100, "category": "Service Fees"}]
    )
    resp = _upload(client, "revenues", content)
    assert resp.status_code == 400
    assert "production unit 77" in resp.json()["error"]["message"]


def test_unknown_type_rejected(client):
    resp = _upload(client, "orders", xlsx_bytes([{"name": "x"}]))
    assert resp.status_code == 400
    assert "orders" in resp.json()["error"]["message"]


def test_garbage_file_rejected(client):
    resp = _upload(client, "customers", b"not a spreadsheet")
    assert resp.status_code == 400
    assert resp.json()["error"]["type"] == "import_error"


def test_oversized_upload(client, monkeypatch):
    monkeypatch.setenv("MAX_UPLOAD_BYTES", "64")
    resp = _upload(client, "customers", b"x" * 200)
    assert resp.status_code == 413
    assert resp.json()["error"]["type"] == "payload_too_large"


def _order(client, unit_id):
    customer = client.post("/api/v1/customers", json={"name": "Lata"}).json()
    resp = client.post(
        "/api/v1/orders",
        json={
            "order_number": "ORD-9",
            "customer_id": customer["id"],
            "production_unit_id": unit_id,
            "total_amount": 1180,
            "description": "Saree blouse",
            "category": "Service Fees",
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_revenue_order_reference_checked(client, unit):
    order = _order(client, unit["id"])
    content = xlsx_bytes(
        [
            {"productionUnitId": unit["id"], "description": "Advance", "amount": 500, "category": "Service Fees", "orderId": order["id"]},
            {"productionUnitId": unit["id"], "description": "Balance", "amount": 680, "category": "Service Fees", "orderId": 999},
        ]
    )
    resp = _upload(client, "revenues", content)
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"]["message"] == "Row 3: order 999 does not exist"
    assert body["error"]["details"]["field"] == "order_id"
    assert client.get("/api/v1/revenues").json() == []


def test_revenue_with_known_order_imported(client, unit):
    order = _order(client, unit["id"])
    content = xlsx_bytes(
        [{"productionUnitId": unit["id"], "description": "Advance", "amount": 500, "category": "Service Fees", "orderId": order["id"]}]
    )
    assert _upload(client, "revenues", content).status_code == 200
    assert client.get("/api/v1/revenues").json()[0]["order_id"] == order["id"]


def test_csv_numeric_text_cells(client, unit):
    content = (
        "production_unit_id,description,amount,category,gst_rate\n"
        f"{unit['id']}.0,Fabric,5900,Office Supplies,18\n"
        f"{unit['id']},Rent,1000.50,Rent,\n"
    ).encode()
    resp = _upload(client, "expenses", content, filename="expenses.csv")
    assert resp.status_code == 200, resp.text

    expenses = client.get("/api/v1/expenses").json()
    assert [e["production_unit_id"] for e in expenses] == [unit["id"], unit["id"]]
    assert expenses[0]["amount"] == 5900
    assert expenses[0]["gst_amount"] == 900
    assert expenses[1]["amount"] == 1000.5
    assert client.get(f"/api/v1/production-units/{unit['id']}").json()["cost_to_date"] == 6900.5


def test_csv_unknown_unit_as_decimal_text(client, unit):
    content = b"production_unit_id,description,amount,category\n42.0,x,10,Rent\n"
    resp = _upload(client, "expenses", content, filename="expenses.csv")
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Row 2: production unit 42 does not exist"
