"""
Indian GST (Goods and Services Tax) arithmetic and reference tables.

All amounts are INR. "Total" amounts are GST-inclusive, "base" amounts are
exclusive; every helper rounds to 2 decimals.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

GST_RATES: List[int] = [0, 5, 12, 18, 28]
DEFAULT_GST_RATE = 18

# code -> (description, default rate)
HSN_CODES: Dict[str, Tuple[str, int]] = {
    "1001": ("Agricultural Products", 0),
    "2201": ("Water", 5),
    "3004": ("Medicaments", 12),
    "4901": ("Books, Printed Material", 0),
    "5208": ("Cotton Fabrics", 5),
    "6101": ("Apparel and Clothing", 5),
    "7108": ("Gold, Precious Metals", 5),
    "8415": ("Air Conditioners", 28),
    "8471": ("Computers", 18),
    "8517": ("Mobile Phones", 18),
    "9401": ("Furniture", 18),
    "9503": ("Toys", 12),
}

# category -> (default rate, default HSN)
EXPENSE_CATEGORIES: Dict[str, Tuple[int, Optional[str]]] = {
    "Raw Materials": (5, "1001"),
    "Equipment": (18, "8471"),
    "Office Supplies": (12, None),
    "Utilities": (18, None),
    "Rent": (18, None),
    "Marketing": (18, None),
    "Transportation": (5, None),
    "Salaries": (0, None),
    "Insurance": (18, None),
    "Professional Services": (18, None),
    "Maintenance": (18, None),
    "Miscellaneous": (18, None),
}

REVENUE_CATEGORIES: Dict[str, Tuple[int, Optional[str]]] = {
    "Product Sales": (18, "8471"),
    "Service Fees": (18, None),
    "Consulting": (18, None),
    "Licensing": (18, None),
    "Royalties": (18, None),
    "Commission": (18, None),
    "Interest": (0, None),
    "Export Sales": (0, None),
}


# PUBLIC_INTERFACE
def gst_from_total(total: float, rate: float) -> float:
    """GST component of a GST-inclusive total."""
    return round(total * rate / (100 + rate), 2)


# PUBLIC_INTERFACE
def base_from_total(total: float, rate: float) -> float:
    """Taxable value of a GST-inclusive total."""
    return round(total * 100 / (100 + rate), 2)


# PUBLIC_INTERFACE
def gst_from_base(base: float, rate: float) -> float:
    """GST payable on a taxable value."""
    return round(base * rate / 100, 2)


# PUBLIC_INTERFACE
def total_from_base(base: float, rate: float) -> float:
    """GST-inclusive total for a taxable value."""
    return round(base + gst_from_base(base, rate), 2)


def expense_category_rate(category: str) -> int:
    return EXPENSE_CATEGORIES.get(category, (DEFAULT_GST_RATE, None))[0]


def revenue_category_rate(category: str) -> int:
    return REVENUE_CATEGORIES.get(category, (DEFAULT_GST_RATE, None))[0]


def hsn_for_category(category: str) -> Optional[str]:
    """Default HSN for a category; expense categories take precedence."""
    expense_hsn = EXPENSE_CATEGORIES.get(category, (None, None))[1]
    if expense_hsn:
        return expense_hsn
    return REVENUE_CATEGORIES.get(category, (None, None))[1]


# PUBLIC_INTERFACE
def apply_gst_defaults(
    values: Dict[str, Any],
    amount_key: str = "amount",
    current: Optional[Any] = None,
) -> Dict[str, Any]:
    """
    Fill base_amount/gst_amount from a GST-inclusive amount and rate.

    Applies only when the amount or rate is being set and the caller supplied
    neither base_amount nor gst_amount. `current` is the stored record on
    updates, used for whichever of amount/rate the change leaves out.
    """
    if amount_key not in values and "gst_rate" not in values:
        return values
    if values.get("base_amount") is not None or values.get("gst_amount") is not None:
        return values

    if "gst_rate" in values:
        rate = values["gst_rate"]
    else:
        rate = getattr(current, "gst_rate", None)
    if amount_key in values:
        amount = values[amount_key]
    else:
        amount = getattr(current, amount_key, None)
    if not isinstance(rate, (int, float)) or not isinstance(amount, (int, float)):
        return values

    return {
        **values,
        "base_amount": base_from_total(amount, rate),
        "gst_amount": gst_from_total(amount, rate),
    }


# PUBLIC_INTERFACE
def format_inr(amount: Any) -> str:
    """
    Format an amount as Indian Rupees, e.g. 1234567.8 -> '₹12,34,567.80'.

    Indian grouping keeps the last three digits together and groups the rest
    in pairs (lakh, crore).
    """
    value = round(float(amount), 2)
    sign = "-" if value < 0 else ""
    whole, frac = f"{abs(value):.2f}".split(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups: List[str] = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])
    return f"{sign}₹{whole}.{frac}"


def sample_expenses(production_unit_id: int) -> List[Dict[str, Any]]:
    """Demonstration expenses covering the common GST slabs."""
    rows = [
        ("Office Supplies Purchase", 5900, 5000, 18, 900, "Office Supplies", "4901", "INV-001"),
        ("Raw Material Purchase", 10500, 10000, 5, 500, "Raw Materials", "1001", "INV-002"),
        ("Equipment Maintenance", 11800, 10000, 18, 1800, "Maintenance", "8471", "INV-003"),
        ("Transportation Services", 5250, 5000, 5, 250, "Transportation", "9965", "INV-004"),
    ]
    return [_sample_row(production_unit_id, *row) for row in rows]


def sample_revenues(production_unit_id: int) -> List[Dict[str, Any]]:
    """Demonstration revenues, including a zero-rated export sale."""
    rows = [
        ("Product Sales", 118000, 100000, 18, 18000, "Product Sales", "8471", "SINV-001"),
        ("Consulting Services", 59000, 50000, 18, 9000, "Consulting", "9983", "SINV-002"),
        ("Export Sales", 200000, 200000, 0, 0, "Export Sales", "8471", "SINV-003"),
    ]
    return [_sample_row(production_unit_id, *row) for row in rows]


def _sample_row(
    production_unit_id: int,
    description: str,
    amount: float,
    base_amount: float,
    gst_rate: float,
    gst_amount: float,
    category: str,
    hsn: str,
    invoice_number: str,
) -> Dict[str, Any]:
    return {
        "production_unit_id": production_unit_id,
        "description": description,
        "amount": amount,
        "base_amount": base_amount,
        "gst_rate": gst_rate,
        "gst_amount": gst_amount,
        "category": category,
        "hsn": hsn,
        "invoice_number": invoice_number,
        "currency": "INR",
    }
