"""
Spreadsheet import.

An upload is parsed completely and every row validated before anything is
written; a single bad row rejects the whole file. Rows that pass are inserted
in one locked unit of work together with any production unit cost changes.
"""
from __future__ import annotations

import io
import logging
import re
import zipfile
from collections import defaultdict
from typing import Any, Dict, List, Optional, Tuple, Type

import pandas as pd
from pydantic import ValidationError

from src.db.base import Base
from src.db.models import Customer, Expense, InventoryItem, ProductionUnit, Revenue
from src.db.session import WorkbookSession
from src.db.workbook import frame_to_records, read_frame
from src.repositories.base import BaseRepository
from src.repositories.finance import ExpenseRepository, RevenueRepository
from src.repositories.inventory import InventoryItemRepository
from src.repositories.production import ProductionUnitRepository
from src.repositories.sales import CustomerRepository, OrderRepository
from src.services.base import BaseService
from src.services.exceptions import ImportFormatError, PayloadTooLargeError
from src.services.gst import apply_gst_defaults

logger = logging.getLogger(__name__)

# import type -> (model, required columns)
IMPORT_SPECS: Dict[str, Tuple[Type[Base], List[str]]] = {
    "production_units": (ProductionUnit, ["name", "location", "status"]),
    "expenses": (Expense, ["production_unit_id", "description", "amount", "category"]),
    "revenues": (Revenue, ["production_unit_id", "description", "amount", "category"]),
    "inventory": (InventoryItem, ["name", "quantity", "unit_cost"]),
    "customers": (Customer, ["name"]),
}

IMPORT_TYPES = tuple(IMPORT_SPECS)

# never taken from uploaded files
_SERVER_COLUMNS = {"id", "cost_to_date"}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[\s\-]+")


def normalize_header(header: Any) -> str:
    """'productionUnitId', 'Production Unit Id' and 'PRODUCTION_UNIT_ID' all become 'production_unit_id'."""
    text = str(header).strip()
    text = _CAMEL_BOUNDARY.sub("_", text)
    text = _SEPARATORS.sub("_", text)
    return text.lower()


def read_upload(content: bytes, filename: Optional[str] = None) -> pd.DataFrame:
    """Parse an uploaded .xlsx or .csv file into a DataFrame of raw cell values."""
    try:
        if filename and filename.lower().endswith(".csv"):
            return pd.read_csv(io.BytesIO(content), dtype=object)
        return read_frame(content)
    except (ValueError, KeyError, OSError, zipfile.BadZipFile) as exc:
        raise ImportFormatError(f"Unreadable spreadsheet: {exc}") from exc


def _validation_details(exc: ValidationError) -> List[Dict[str, Any]]:
    return exc.errors(include_url=False, include_context=False, include_input=False)


class ImportService(BaseService):
    """Import production units, expenses, revenues, inventory or customers from a spreadsheet."""

    def __init__(self, session: WorkbookSession) -> None:
        super().__init__(session)
        self.unit_repo = ProductionUnitRepository(session)
        self.order_repo = OrderRepository(session)
        self.repos: Dict[str, BaseRepository] = {
            "production_units": self.unit_repo,
            "expenses": ExpenseRepository(session),
            "revenues": RevenueRepository(session),
            "inventory": InventoryItemRepository(session),
            "customers": CustomerRepository(session),
        }

    # PUBLIC_INTERFACE
    async def import_file(
        self,
        import_type: str,
        content: bytes,
        filename: Optional[str] = None,
        max_bytes: Optional[int] = None,
    ) -> int:
        """
        Import every data row of `content` as records of `import_type`.

        Returns:
            Number of records created.
        Raises:
            PayloadTooLargeError: file larger than max_bytes.
            ImportFormatError: unknown type, unreadable file, no data rows,
                missing required columns, or an invalid row (message names the row).
        """
        if max_bytes is not None and len(content) > max_bytes:
            raise PayloadTooLargeError(
                f"File exceeds the {max_bytes} byte upload limit", details={"size": len(content)}
            )
        if import_type not in IMPORT_SPECS:
            raise ImportFormatError(
                f"Unsupported import type: {import_type}", details={"allowed": list(IMPORT_TYPES)}
            )

        rows = self._parse(import_type, read_upload(content, filename))
        created = await self.session.run_sync(self._insert_rows, import_type, rows)
        logger.info("Imported %d %s record(s) from %s", created, import_type, filename or "upload")
        return created

    def _parse(self, import_type: str, df: pd.DataFrame) -> List[Tuple[int, Dict[str, Any]]]:
        """Validate headers and rows; returns (spreadsheet row number, values) pairs."""
        model, required = IMPORT_SPECS[import_type]
        allowed = set(model.columns()) - _SERVER_COLUMNS

        df = df.rename(columns=lambda c: normalize_header(c))
        missing = [c for c in required if c not in df.columns]
        if missing:
            raise ImportFormatError(
                f"Missing required column(s): {', '.join(missing)}", details={"missing": missing}
            )

        rows: List[Tuple[int, Dict[str, Any]]] = []
        # header is spreadsheet row 1
        for row_no, raw in enumerate(frame_to_records(df), start=2):
            values = {k: v for k, v in raw.items() if k in allowed and v is not None}
            if not values:
                continue
            if import_type in ("expenses", "revenues"):
                values = apply_gst_defaults(_coerce_numbers(values))
            try:
                record = model.model_validate({**values, "id": 1})
            except ValidationError as exc:
                raise ImportFormatError(
                    f"Row {row_no}: invalid {import_type} data", details=_validation_details(exc)
                ) from exc
            # typed values; server defaults are filled in again on insert
            rows.append((row_no, record.model_dump(exclude={"id"}, exclude_unset=True)))

        if not rows:
            raise ImportFormatError("File contains no data rows")
        return rows

    def _insert_rows(self, import_type: str, rows: List[Tuple[int, Dict[str, Any]]]) -> int:
        unit_ids = {u.id for u in self.unit_repo._all()}
        order_ids = {o.id for o in self.order_repo._all()} if import_type == "revenues" else set()
        for row_no, values in rows:
            unit_id = values.get("production_unit_id")
            if unit_id is not None and unit_id not in unit_ids:
                raise ImportFormatError(
                    f"Row {row_no}: production unit {unit_id} does not exist",
                    details={"row": row_no, "field": "production_unit_id", "value": unit_id},
                )
            order_id = values.get("order_id")
            if import_type == "revenues" and order_id is not None and order_id not in order_ids:
                raise ImportFormatError(
                    f"Row {row_no}: order {order_id} does not exist",
                    details={"row": row_no, "field": "order_id", "value": order_id},
                )

        created = self.repos[import_type]._insert_many([values for _, values in rows])

        if import_type == "expenses":
            deltas: Dict[int, float] = defaultdict(float)
            for expense in created:
                deltas[expense.production_unit_id] += expense.amount
            for unit_id, delta in deltas.items():
                self.unit_repo._adjust_cost(unit_id, delta)
        return len(created)


def _coerce_numbers(values: Dict[str, Any]) -> Dict[str, Any]:
    """Turn numeric text (common in CSV uploads) into floats for the GST arithmetic."""
    out = dict(values)
    for key in ("amount", "gst_rate"):
        if isinstance(out.get(key), str):
            try:
                out[key] = float(out[key])
            except ValueError:
                # left for model validation to report
                pass
    return out
