"""
Spreadsheet helpers shared by the table engine, imports and report exports.

Tables are plain first-sheet workbooks: a header row followed by one row per
record. Reading goes through pandas (openpyxl engine); writing goes through a
pandas ExcelWriter and then styles the header row with openpyxl.
"""
from __future__ import annotations

import io
import logging
import os
import tempfile
from pathlib import Path
from typing import IO, Any, Dict, List, Sequence, Union

import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFE2E8F0")
_MONEY_HINTS = ("amount", "cost", "price", "value")
_MIN_WIDTH = 10
_MAX_WIDTH = 30


# PUBLIC_INTERFACE
def read_frame(source: Union[str, Path, bytes, IO[bytes]]) -> pd.DataFrame:
    """
    Read the first worksheet of a workbook into a DataFrame of raw cell values.

    Parameters:
        source: file path, raw bytes or a binary file object.
    Returns:
        DataFrame with object dtype (cells are not coerced; blanks are NaN).
    """
    if isinstance(source, bytes):
        source = io.BytesIO(source)
    return pd.read_excel(source, sheet_name=0, dtype=object, engine="openpyxl")


# PUBLIC_INTERFACE
def read_rows(source: Union[str, Path, bytes, IO[bytes]]) -> List[Dict[str, Any]]:
    """Read a workbook into a list of header->value dicts (blanks become None)."""
    df = read_frame(source)
    return frame_to_records(df)


def frame_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Convert a DataFrame into row dicts, mapping NaN/NaT to None."""
    if df.empty:
        return []
    cleaned = df.astype(object).where(pd.notna(df), None)
    return cleaned.to_dict(orient="records")


def _style_sheet(worksheet, columns: Sequence[str], df: pd.DataFrame) -> None:
    """Bold/filled header, approximate auto-width and money number formats."""
    for cell in worksheet[1]:
        cell.font = Font(bold=True)
        cell.fill = _HEADER_FILL

    for idx, column in enumerate(columns, start=1):
        values = [str(column)] + [str(v) for v in df[column].tolist() if v is not None]
        longest = max((len(v) for v in values), default=0)
        letter = get_column_letter(idx)
        worksheet.column_dimensions[letter].width = min(_MAX_WIDTH, max(_MIN_WIDTH, longest + 2))

        if any(hint in str(column).lower() for hint in _MONEY_HINTS):
            for (cell,) in worksheet.iter_rows(min_row=2, min_col=idx, max_col=idx):
                if isinstance(cell.value, (int, float)):
                    cell.number_format = "#,##0.00"


def _write_frame(target: Union[str, Path, IO[bytes]], df: pd.DataFrame, sheet_name: str) -> None:
    # Excel caps sheet titles at 31 characters
    sheet_name = (sheet_name or "Sheet1")[:31]
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
        _style_sheet(writer.sheets[sheet_name], list(df.columns), df)


# PUBLIC_INTERFACE
def write_rows(
    path: Union[str, Path],
    columns: Sequence[str],
    rows: Sequence[Dict[str, Any]],
    sheet_name: str = "Sheet1",
) -> None:
    """
    Replace the workbook at `path` with the given header and rows.

    The workbook is written to a temporary file in the same directory and then
    atomically renamed over the target, so readers never see a half-written file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(list(rows), columns=list(columns))

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}-", suffix=".xlsx", dir=str(path.parent))
    os.close(fd)
    try:
        _write_frame(tmp_name, df, sheet_name)
        os.replace(tmp_name, path)
    except Exception:
        logger.exception("Failed writing workbook %s", path)
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


# PUBLIC_INTERFACE
def frame_to_xlsx_bytes(df: pd.DataFrame, sheet_name: str = "Report") -> bytes:
    """Render a DataFrame as a styled in-memory workbook."""
    buffer = io.BytesIO()
    _write_frame(buffer, df, sheet_name)
    return buffer.getvalue()
