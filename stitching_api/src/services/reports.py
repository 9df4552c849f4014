from __future__ import annotations

import io
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from src.db.base import utcnow
from src.db.models.reports import Report
from src.db.session import WorkbookSession
from src.db.workbook import XLSX_MEDIA_TYPE, frame_to_xlsx_bytes
from src.repositories.finance import ExpenseRepository, RevenueRepository
from src.repositories.inventory import InventoryItemRepository
from src.repositories.maintenance import MaintenanceRecordRepository
from src.repositories.payroll import SalaryPaymentRepository
from src.repositories.production import ProductionUnitRepository
from src.repositories.reports import ReportRepository
from src.repositories.sales import CustomerRepository, OrderRepository
from src.services.base import BaseService
from src.services.exceptions import NotFoundError, ServiceError
from src.services.gst import format_inr

logger = logging.getLogger(__name__)

REPORT_TYPES = (
    "production_units",
    "expenses",
    "revenues",
    "inventory",
    "customers",
    "orders",
    "salary_payments",
    "maintenance_records",
    "financial_summary",
)

MEDIA_TYPES: Dict[str, str] = {
    "xlsx": XLSX_MEDIA_TYPE,
    "csv": "text/csv",
    "pdf": "application/pdf",
}

REPORT_FORMATS = tuple(MEDIA_TYPES)


def _day(value: Optional[datetime]) -> Optional[str]:
    return value.strftime("%Y-%m-%d") if value else None


def render_frame(df: pd.DataFrame, export_format: str, title: str) -> bytes:
    """
    Convert a DataFrame to file content in the requested format.

    Supported formats:
      - csv: comma-separated text (UTF-8)
      - xlsx: styled workbook with a single sheet named after the report
      - pdf: landscape table rendered with reportlab
    """
    if export_format == "csv":
        return df.to_csv(index=False).encode("utf-8")

    if export_format == "xlsx":
        return frame_to_xlsx_bytes(df, sheet_name=title)

    if export_format == "pdf":
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import A4, landscape
        from reportlab.lib.styles import getSampleStyleSheet
        from reportlab.platypus import Paragraph, SimpleDocTemplate, Table, TableStyle

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer, pagesize=landscape(A4), leftMargin=18, rightMargin=18, topMargin=18, bottomMargin=18
        )
        styles = getSampleStyleSheet()
        elements: list = [Paragraph(f"{title} ({utcnow().strftime('%Y-%m-%d %H:%M UTC')})", styles["Title"])]

        data = [list(df.columns)] + df.fillna("").astype(str).values.tolist()
        table = Table(data, repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
                    ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 8),
                    ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ]
            )
        )
        elements.append(table)
        doc.build(elements)
        return buffer.getvalue()

    raise ServiceError(f"Unsupported report format: {export_format}", details={"allowed": list(REPORT_FORMATS)})


def report_title(report_type: str) -> str:
    return report_type.replace("_", " ").title()


class ReportService(BaseService):
    """
    Generates report files into the reports directory and keeps the Report table in sync.

    File names are `<type>_<timestamp>.<format>`; the download endpoint serves
    them by bare file name.
    """

    def __init__(self, session: WorkbookSession) -> None:
        super().__init__(session)
        self.reports_dir = Path(session.engine.reports_dir)
        self.report_repo = ReportRepository(session)
        self.unit_repo = ProductionUnitRepository(session)
        self.expense_repo = ExpenseRepository(session)
        self.revenue_repo = RevenueRepository(session)
        self.inventory_repo = InventoryItemRepository(session)
        self.customer_repo = CustomerRepository(session)
        self.order_repo = OrderRepository(session)
        self.salary_repo = SalaryPaymentRepository(session)
        self.maintenance_repo = MaintenanceRecordRepository(session)

    # PUBLIC_INTERFACE
    async def generate(self, report_type: str, export_format: str = "xlsx", now: Optional[datetime] = None) -> Report:
        """
        Build the report, write it to disk and record it.

        Raises:
            ServiceError: unknown report type or format (400).
        """
        if report_type not in REPORT_TYPES:
            raise ServiceError(f"Unsupported report type: {report_type}", details={"allowed": list(REPORT_TYPES)})
        if export_format not in REPORT_FORMATS:
            raise ServiceError(
                f"Unsupported report format: {export_format}", details={"allowed": list(REPORT_FORMATS)}
            )
        return await self.session.run_sync(self._generate, report_type, export_format, now or utcnow())

    def _generate(self, report_type: str, export_format: str, now: datetime) -> Report:
        builders: Dict[str, Callable[[], pd.DataFrame]] = {
            "production_units": self._production_units_frame,
            "expenses": lambda: self._money_frame(self.expense_repo._all()),
            "revenues": lambda: self._money_frame(self.revenue_repo._all()),
            "inventory": self._inventory_frame,
            "customers": self._customers_frame,
            "orders": self._orders_frame,
            "salary_payments": self._salary_frame,
            "maintenance_records": self._maintenance_frame,
            "financial_summary": self._financial_summary_frame,
        }
        df = builders[report_type]()

        stamp = now.strftime("%Y-%m-%dT%H-%M-%S-%f")
        title = report_title(report_type)
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        path = self.reports_dir / f"{report_type}_{stamp}.{export_format}"
        path.write_bytes(render_frame(df, export_format, title))

        try:
            report = self.report_repo._insert(
                {
                    "name": f"{title} Report - {stamp}",
                    "type": report_type,
                    "format": export_format,
                    "generated_at": now,
                    "file_path": str(path),
                }
            )
        except Exception:
            # no record, no file
            path.unlink(missing_ok=True)
            raise
        logger.info("Generated %s report %s (%d rows)", report_type, path.name, len(df))
        return report

    # PUBLIC_INTERFACE
    async def delete(self, report_id: int) -> None:
        """Delete the report record, then remove its file; file removal failures are only logged."""
        report = await self.report_repo.get(report_id)
        if report is None:
            raise NotFoundError(f"Report {report_id} not found")
        await self.report_repo.delete(report_id)
        try:
            os.remove(report.file_path)
        except FileNotFoundError:
            logger.warning("Report file %s already missing", report.file_path)
        except OSError:
            logger.exception("Could not remove report file %s", report.file_path)
        logger.info("Deleted report %s", report_id)

    # PUBLIC_INTERFACE
    def resolve_download(self, filename: str) -> Path:
        """
        Map a bare file name to a file in the reports directory.

        Raises:
            ServiceError: name contains a path component (400).
            NotFoundError: no such file (404).
        """
        if not filename or "/" in filename or "\\" in filename or filename in (".", "..") or "\x00" in filename:
            raise ServiceError("Invalid report file name", details={"filename": filename})
        path = self.reports_dir / filename
        if not path.is_file():
            raise NotFoundError(f"Report file {filename} not found")
        return path

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------
    def _unit_names(self) -> Dict[int, str]:
        return {u.id: u.name for u in self.unit_repo._all()}

    def _production_units_frame(self) -> pd.DataFrame:
        rows = [
            [u.id, u.name, u.location, u.status, u.cost_to_date, _day(u.created_at)]
            for u in self.unit_repo._all()
        ]
        return pd.DataFrame(rows, columns=["ID", "Name", "Location", "Status", "Cost To Date", "Created At"])

    def _money_frame(self, records: List[Any]) -> pd.DataFrame:
        names = self._unit_names()
        rows = [
            [
                r.id,
                _day(r.date),
                r.description,
                names.get(r.production_unit_id, "Unknown"),
                r.amount,
                r.gst_rate,
                r.gst_amount,
                r.category,
            ]
            for r in records
        ]
        return pd.DataFrame(
            rows,
            columns=["ID", "Date", "Description", "Production Unit", "Amount", "GST Rate", "GST Amount", "Category"],
        )

    def _inventory_frame(self) -> pd.DataFrame:
        names = self._unit_names()
        rows = [
            [
                i.id,
                i.name,
                i.description,
                i.quantity,
                i.unit_cost,
                round(i.quantity * i.unit_cost, 2),
                names.get(i.production_unit_id, "Unknown") if i.production_unit_id is not None else None,
                _day(i.created_at),
            ]
            for i in self.inventory_repo._all()
        ]
        return pd.DataFrame(
            rows,
            columns=["ID", "Name", "Description", "Quantity", "Unit Cost", "Total Value", "Production Unit", "Created At"],
        )

    def _customers_frame(self) -> pd.DataFrame:
        rows = [
            [c.id, c.name, c.phone, c.email, c.address, c.gstin, _day(c.created_at)]
            for c in self.customer_repo._all()
        ]
        return pd.DataFrame(rows, columns=["ID", "Name", "Phone", "Email", "Address", "GSTIN", "Created At"])

    def _orders_frame(self) -> pd.DataFrame:
        names = self._unit_names()
        customers = {c.id: c.name for c in self.customer_repo._all()}
        rows = [
            [
                o.id,
                o.order_number,
                customers.get(o.customer_id, "Unknown"),
                names.get(o.production_unit_id, "Unknown"),
                _day(o.order_date),
                _day(o.delivery_date),
                o.status,
                o.total_amount,
                o.paid_amount,
                round(o.total_amount - o.paid_amount, 2),
            ]
            for o in self.order_repo._all()
        ]
        return pd.DataFrame(
            rows,
            columns=[
                "ID",
                "Order Number",
                "Customer",
                "Production Unit",
                "Order Date",
                "Delivery Date",
                "Status",
                "Total Amount",
                "Paid Amount",
                "Balance Due",
            ],
        )

    def _salary_frame(self) -> pd.DataFrame:
        names = self._unit_names()
        rows = [
            [
                p.id,
                p.employee_name,
                names.get(p.production_unit_id, "Unknown"),
                p.month,
                p.year,
                p.amount,
                _day(p.payment_date),
                p.payment_method,
            ]
            for p in self.salary_repo._all()
        ]
        return pd.DataFrame(
            rows,
            columns=["ID", "Employee", "Production Unit", "Month", "Year", "Amount", "Payment Date", "Payment Method"],
        )

    def _maintenance_frame(self) -> pd.DataFrame:
        names = self._unit_names()
        rows = [
            [
                m.id,
                _day(m.date),
                names.get(m.production_unit_id, "Unknown"),
                m.machine_name,
                m.maintenance_type,
                m.description,
                m.cost,
                _day(m.next_maintenance_date),
            ]
            for m in self.maintenance_repo._all()
        ]
        return pd.DataFrame(
            rows,
            columns=["ID", "Date", "Production Unit", "Machine", "Type", "Description", "Cost", "Next Maintenance"],
        )

    def _financial_summary_frame(self) -> pd.DataFrame:
        units = self.unit_repo._all()
        total_expenses = sum(e.amount for e in self.expense_repo._all())
        total_revenue = sum(r.amount for r in self.revenue_repo._all())
        profit = total_revenue - total_expenses
        margin = profit / total_revenue * 100 if total_revenue else 0.0
        rows = [
            ["Total Revenue", format_inr(total_revenue)],
            ["Total Expenses", format_inr(total_expenses)],
            ["Profit", format_inr(profit)],
            ["Profit Margin", f"{margin:.2f}%"],
            ["Production Units", str(len(units))],
            ["Active Units", str(sum(1 for u in units if u.status == "active"))],
        ]
        return pd.DataFrame(rows, columns=["Metric", "Value"])
