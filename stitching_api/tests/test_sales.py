import pytest


@pytest.fixture
def customer(client):
    resp = client.post("/api/v1/customers", json={"name": "Meera Textiles", "phone": "9876543210"})
    assert resp.status_code == 201
    return resp.json()


def _order(client, customer_id, unit_id, number="ORD-001", **extra):
    body = {
        "order_number": number,
        "customer_id": customer_id,
        "production_unit_id": unit_id,
        "total_amount": 2360,
        "paid_amount": 1000,
        "description": "Two kurtas",
        "category": "Product Sales",
    }
    body.update(extra)
    return client.post("/api/v1/orders", json=body)


def test_phone_kept_as_text(customer):
    assert customer["phone"] == "9876543210"


def test_create_order(client, customer, unit):
    resp = _order(client, customer["id"], unit["id"], gst_rate=18)
    assert resp.status_code == 201, resp.text
    order = resp.json()
    assert order["status"] == "pending"
    assert order["balance_due"] == 1360
    assert order["base_amount"] == 2000
    assert order["gst_amount"] == 360


def test_order_number_unique(client, customer, unit):
    assert _order(client, customer["id"], unit["id"]).status_code == 201
    resp = _order(client, customer["id"], unit["id"])
    assert resp.status_code == 409
    assert resp.json()["error"]["type"] == "conflict"


def test_order_number_change_checked_on_update(client, customer, unit):
    _order(client, customer["id"], unit["id"], number="A")
    second = _order(client, customer["id"], unit["id"], number="B").json()

    assert client.put(f"/api/v1/orders/{second['id']}", json={"order_number": "A"}).status_code == 409
    # keeping its own number is fine
    resp = client.put(f"/api/v1/orders/{second['id']}", json={"order_number": "B", "status": "ready"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "ready"


def test_order_references_checked(client, customer, unit):
    resp = _order(client, 99, unit["id"])
    assert resp.status_code == 400
    assert resp.json()["error"]["details"]["field"] == "customer_id"

    resp = _order(client, customer["id"], 99)
    assert resp.status_code == 400
    assert resp.json()["error"]["details"]["field"] == "production_unit_id"


def test_order_status_must_be_known(client, customer, unit):
    assert _order(client, customer["id"], unit["id"], status="lost").status_code == 400


def test_order_filters(client, customer, unit):
    other = client.post("/api/v1/customers", json={"name": "Kiran"}).json()
    _order(client, customer["id"], unit["id"], number="1")
    _order(client, other["id"], unit["id"], number="2", status="delivered")

    delivered = client.get("/api/v1/orders", params={"status": "delivered"}).json()
    assert [o["order_number"] for o in delivered] == ["2"]
    mine = client.get("/api/v1/orders", params={"customer_id": customer["id"]}).json()
    assert [o["order_number"] for o in mine] == ["1"]
    assert [o["order_number"] for o in client.get(f"/api/v1/customers/{other['id']}/orders").json()] == ["2"]


def test_customer_with_orders_cannot_be_deleted(client, customer, unit):
    order = _order(client, customer["id"], unit["id"]).json()

    resp = client.delete(f"/api/v1/customers/{customer['id']}")
    assert resp.status_code == 409
    assert resp.json()["error"]["details"]["order_ids"] == [order["id"]]

    assert client.delete(f"/api/v1/orders/{order['id']}").status_code == 204
    assert client.delete(f"/api/v1/customers/{customer['id']}").status_code == 204
    assert client.delete(f"/api/v1/customers/{customer['id']}").status_code == 404


def test_customer_search(client, customer):
    client.post("/api/v1/customers", json={"name": "Anil Tailors"})
    found = client.get("/api/v1/customers", params={"search": "meera"}).json()
    assert [c["name"] for c in found] == ["Meera Textiles"]
