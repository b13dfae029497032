"""
RESPONSIBILITIES
- Read .xlsx workbooks into the generic Workbook/Sheet/Row/Cell model via openpyxl.
- Write the generic model back to .xlsx atomically, cell values as text.
PROCESS OVERVIEW
1. read_workbook() loads values only, stringifies them and skips empty cells/rows.
   A record whose fields are all empty is written as a blank row and is not read back.
2. write_workbook() creates one worksheet per sheet in workbook order.
3. _atomic_save() writes to a temporary file and swaps it into place.
"""

from __future__ import annotations

import os
from datetime import date, datetime, time
from decimal import Decimal
from pathlib import Path
from zipfile import BadZipFile

from openpyxl import Workbook as XlsxWorkbook
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from sheetmapper.errors import SourceFormatError
from sheetmapper.model import Cell, Row, Sheet, Workbook
from sheetmapper.utils.log import get_logger

logger = get_logger("codecs.excel_io")


def cell_text(value: object) -> str | None:
    """Return the text form of a raw openpyxl cell value (``None`` for blanks)."""

    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, datetime):
        if value.time() == time.min:
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    text = str(value)
    return text if text != "" else None


def _tmp_path(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


def _atomic_save(workbook: XlsxWorkbook, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = _tmp_path(path)
    workbook.save(tmp_path)
    os.replace(tmp_path, path)


def read_workbook(path: Path) -> Workbook:
    """Load an .xlsx file into the generic model.

    Sheets are numbered from 1 in workbook order and keep their titles.

    Raises:
        FileNotFoundError: When the workbook does not exist.
        SourceFormatError: When the file is not a readable .xlsx package.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Source workbook not found: {path}")

    logger.info("Reading Excel workbook", extra={"path": str(path)})
    try:
        xlsx = load_workbook(path, data_only=True)
    except (InvalidFileException, BadZipFile) as exc:
        raise SourceFormatError(f"Unreadable workbook {path}: {exc}") from exc
    result = Workbook()
    try:
        for sheet_index, worksheet in enumerate(xlsx.worksheets, start=1):
            sheet = result.add_sheet(Sheet(sheet_index, worksheet.title))
            for row_index, values in enumerate(worksheet.iter_rows(values_only=True), start=1):
                cells = [
                    Cell(column_index, text)
                    for column_index, text in enumerate((cell_text(v) for v in values), start=1)
                    if text is not None
                ]
                if not cells:
                    continue
                row = sheet.add_row(Row(row_index))
                for cell in cells:
                    row.add_cell(cell)
    finally:
        xlsx.close()

    logger.info(
        "Excel workbook loaded",
        extra={"sheets": [sheet.name for sheet in result], "path": str(path)},
    )
    return result


def write_workbook(workbook: Workbook, path: Path) -> Path:
    """Write the generic model to ``path`` as .xlsx and return the path."""

    path = Path(path)
    xlsx = XlsxWorkbook()
    default_sheet = xlsx.active
    for sheet in workbook:
        worksheet = xlsx.create_sheet(title=sheet.name or f"Sheet{sheet.sheet_index}")
        for row in sheet:
            for cell in row:
                if cell.value is None:
                    continue
                target = worksheet.cell(row=row.row_index, column=cell.column_index)
                target.value = cell.value
                if cell.value.startswith("="):
                    # Keep text that looks like a formula as a literal string.
                    target.data_type = "s"
    if workbook.size_of_sheets():
        xlsx.remove(default_sheet)
    _atomic_save(xlsx, path)
    logger.info(
        "Excel workbook written",
        extra={"path": str(path), "sheets": workbook.size_of_sheets()},
    )
    return path
