from types import SimpleNamespace

import pytest

from src.services import gst


@pytest.mark.parametrize(
    "total, rate, base, tax",
    [
        (5900, 18, 5000.0, 900.0),
        (10500, 5, 10000.0, 500.0),
        (200000, 0, 200000.0, 0.0),
        (100, 12, 89.29, 10.71),
    ],
)
def test_split_inclusive_total(total, rate, base, tax):
    assert gst.base_from_total(total, rate) == base
    assert gst.gst_from_total(total, rate) == tax


def test_gross_up_from_base():
    assert gst.gst_from_base(5000, 18) == 900.0
    assert gst.total_from_base(5000, 18) == 5900.0
    assert gst.total_from_base(1234.5, 28) == 1580.16


def test_category_defaults():
    assert gst.expense_category_rate("Raw Materials") == 5
    assert gst.expense_category_rate("Salaries") == 0
    assert gst.expense_category_rate("Something New") == gst.DEFAULT_GST_RATE
    assert gst.revenue_category_rate("Export Sales") == 0
    assert gst.hsn_for_category("Equipment") == "8471"
    assert gst.hsn_for_category("Product Sales") == "8471"
    assert gst.hsn_for_category("Rent") is None


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "₹0.00"),
        (999, "₹999.00"),
        (5900, "₹5,900.00"),
        (118000, "₹1,18,000.00"),
        (1234567.8, "₹12,34,567.80"),
        (123456789, "₹12,34,56,789.00"),
        (-2500.5, "-₹2,500.50"),
        ("59000", "₹59,000.00"),
    ],
)
def test_format_inr_uses_lakh_crore_grouping(amount, expected):
    assert gst.format_inr(amount) == expected


def test_apply_gst_defaults_derives_missing_amounts():
    out = gst.apply_gst_defaults({"amount": 11800, "gst_rate": 18})
    assert out["base_amount"] == 10000.0
    assert out["gst_amount"] == 1800.0


def test_apply_gst_defaults_keeps_explicit_amounts():
    values = {"amount": 11800, "gst_rate": 18, "base_amount": 9000}
    assert gst.apply_gst_defaults(values) == values


def test_apply_gst_defaults_without_rate_is_noop():
    values = {"amount": 100}
    assert gst.apply_gst_defaults(values) == values


def test_apply_gst_defaults_on_update_uses_stored_rate():
    current = SimpleNamespace(amount=5900.0, gst_rate=18.0)
    out = gst.apply_gst_defaults({"amount": 11800}, current=current)
    assert out["base_amount"] == 10000.0
    assert out["gst_amount"] == 1800.0
    # untouched amount/rate -> nothing recomputed
    assert gst.apply_gst_defaults({"description": "x"}, current=current) == {"description": "x"}


def test_sample_rows_are_consistent():
    for row in gst.sample_expenses(1) + gst.sample_revenues(1):
        assert row["base_amount"] + row["gst_amount"] == row["amount"]
        assert row["production_unit_id"] == 1


def test_calculate_endpoint(client):
    resp = client.post("/api/v1/gst/calculate", json={"amount": 118000, "gst_rate": 18})
    assert resp.json() == {
        "base_amount": 100000.0,
        "gst_amount": 18000.0,
        "total_amount": 118000.0,
        "gst_rate": 18.0,
        "formatted_total": "₹1,18,000.00",
    }

    resp = client.post("/api/v1/gst/calculate", json={"amount": 5000, "gst_rate": 5, "inclusive": False})
    assert resp.json()["total_amount"] == 5250.0


def test_reference_endpoint(client):
    data = client.get("/api/v1/gst/reference").json()
    assert data["rates"] == [0, 5, 12, 18, 28]
    codes = {h["code"]: h for h in data["hsn_codes"]}
    assert codes["6101"]["default_rate"] == 5
    assert {c["kind"] for c in data["expense_categories"]} == {"expense"}


def test_sample_data_books_expenses_against_unit(client):
    resp = client.post("/api/v1/sample-gst-data")
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Sample GST data added successfully"
    assert body["expenses_added"] == 4
    assert body["revenues_added"] == 3

    unit = client.get(f"/api/v1/production-units/{body['production_unit_id']}").json()
    assert unit["name"] == "Sample Production Unit"
    assert unit["cost_to_date"] == 5900 + 10500 + 11800 + 5250
    assert len(client.get("/api/v1/revenues").json()) == 3
