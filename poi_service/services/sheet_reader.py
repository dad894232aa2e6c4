"""
Tabular upload readers

Turn an uploaded ``.xlsx``, ``.xls`` or ``.csv`` file into a list of row
mappings keyed by the header labels of the first row.
"""
import csv
import io
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import openpyxl
import xlrd

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
LEGACY_EXCEL_SUFFIXES = {".xls"}
CSV_SUFFIXES = {".csv"}

SPREADSHEET_CONTENT_TYPES = {
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
    "text/csv",
}


class UnsupportedSheetError(ValueError):
    """The uploaded file is not in a readable tabular format."""


def is_spreadsheet_upload(content_type: str) -> bool:
    media_type = (content_type or "").split(";")[0].strip().lower()
    return media_type in SPREADSHEET_CONTENT_TYPES


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _build_rows(header: Optional[Sequence[Any]], values: Iterable[Sequence[Any]]) -> List[Dict[str, Any]]:
    """Key each row by header label.

    Unlabeled columns are dropped and a repeated label keeps its first column.
    Rows with no filled cell are skipped.
    """
    if header is None:
        return []

    columns = []
    seen = set()
    for index, label in enumerate(header):
        if _is_blank(label):
            continue
        label = str(label).strip()
        if label in seen:
            continue
        seen.add(label)
        columns.append((index, label))

    rows = []
    for raw in values:
        row = {label: raw[index] if index < len(raw) else None for index, label in columns}
        if all(_is_blank(value) for value in row.values()):
            continue
        rows.append(row)
    return rows


def read_excel_rows(path: str) -> List[Dict[str, Any]]:
    """Rows of the first worksheet of an OOXML workbook."""
    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    try:
        values = wb.worksheets[0].iter_rows(values_only=True)
        return _build_rows(next(values, None), values)
    finally:
        wb.close()


def _xls_cell_value(cell) -> Any:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
        return None
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    return cell.value


def read_xls_rows(path: str) -> List[Dict[str, Any]]:
    """Rows of the first worksheet of a legacy BIFF workbook."""
    book = xlrd.open_workbook(path, on_demand=True)
    try:
        sheet = book.sheet_by_index(0)
        values = (
            [_xls_cell_value(cell) for cell in sheet.row(index)]
            for index in range(sheet.nrows)
        )
        return _build_rows(next(values, None), values)
    finally:
        book.release_resources()


def read_csv_rows(path: str) -> List[Dict[str, Any]]:
    content = Path(path).read_bytes()
    try:
        text_content = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        text_content = content.decode("latin-1")

    reader = csv.reader(io.StringIO(text_content))
    return _build_rows(next(reader, None), reader)


def read_rows(path: str, filename: str) -> List[Dict[str, Any]]:
    """Dispatch on the uploaded filename's extension."""
    suffix = Path(filename or "").suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        rows = read_excel_rows(path)
    elif suffix in LEGACY_EXCEL_SUFFIXES:
        rows = read_xls_rows(path)
    elif suffix in CSV_SUFFIXES:
        rows = read_csv_rows(path)
    else:
        raise UnsupportedSheetError(f"Unsupported file type: {filename}")
    logger.info(f"Read {len(rows)} rows from {filename}")
    return rows
