"""CSV input/output for single-sheet documents."""

# Module responsibilities:
# - Read a CSV file into a Sheet through pandas, keeping every value as text.
# - Write a Sheet to CSV as a dense grid, padding missing cells with "".
# - Blank lines are not kept on read, so a record whose fields are all empty does not
#   survive a write/read cycle.

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd

from sheetmapper.errors import SourceFormatError
from sheetmapper.model import Cell, Row, Sheet
from sheetmapper.utils.log import get_logger

logger = get_logger("codecs.csv_io")


def sheet_to_frame(sheet: Sheet) -> pd.DataFrame:
    """Lay the sheet out as a dense, 0-based DataFrame of strings."""

    last_row = sheet.last_row.row_index if sheet.size_of_rows() else 0
    last_column = sheet.last_column_index
    grid = [["" for _ in range(last_column)] for _ in range(last_row)]
    for row in sheet:
        for cell in row:
            if cell.value is not None:
                grid[row.row_index - 1][cell.column_index - 1] = cell.value
    return pd.DataFrame(grid, columns=range(1, last_column + 1), dtype=object)


def frame_to_sheet(
    frame: pd.DataFrame, sheet_index: int = 1, name: Optional[str] = None
) -> Sheet:
    """Build a sheet from a header-less frame; blank strings become absent cells."""

    sheet = Sheet(sheet_index, name)
    for row_position, values in enumerate(frame.itertuples(index=False, name=None), start=1):
        cells = [
            Cell(column_position, str(value))
            for column_position, value in enumerate(values, start=1)
            if value is not None and not pd.isna(value) and str(value) != ""
        ]
        if not cells:
            continue
        row = sheet.add_row(Row(row_position))
        for cell in cells:
            row.add_cell(cell)
    return sheet


def read_csv_sheet(path: Path, sheet_index: int = 1, encoding: str = "utf-8") -> Sheet:
    """Read ``path`` into a sheet named after the file stem.

    Raises:
        FileNotFoundError: When the CSV file does not exist.
        SourceFormatError: When pandas cannot tokenize the file.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Source CSV not found: {path}")

    logger.info("Reading CSV", extra={"path": str(path)})
    try:
        frame = pd.read_csv(
            path,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            encoding=encoding,
        )
    except pd.errors.EmptyDataError:
        frame = pd.DataFrame()
    except pd.errors.ParserError as exc:
        raise SourceFormatError(f"Malformed CSV {path}: {exc}") from exc
    sheet = frame_to_sheet(frame, sheet_index, path.stem)
    logger.info("CSV loaded", extra={"rows": sheet.size_of_rows(), "path": str(path)})
    return sheet


def write_csv_sheet(sheet: Sheet, path: Path, encoding: str = "utf-8") -> Path:
    """Write ``sheet`` to ``path`` without header or index columns."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame = sheet_to_frame(sheet)
    frame.to_csv(path, header=False, index=False, encoding=encoding)
    logger.info("CSV written", extra={"path": str(path), "rows": len(frame.index)})
    return path
