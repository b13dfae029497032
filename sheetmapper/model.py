"""Generic spreadsheet document model: workbook -> sheets -> rows -> cells."""

# Module responsibilities:
# - Hold textual cell content addressed by 1-based row/column indices.
# - Return children sorted by index on every read, whatever the insertion order.
# - Keep child -> parent links as weak references so ownership stays one-way.

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .errors import DuplicateIndexError, IndexOutOfBoundsError


def _check_index(index: int, label: str) -> int:
    if isinstance(index, bool) or not isinstance(index, int) or index < 1:
        raise ValueError(f"{label} must be a positive integer, got {index!r}")
    return index


def _check_position(index: int, size: int) -> None:
    if index < 1 or index > size:
        raise IndexOutOfBoundsError(f"index {index} out of bounds [1, {size}]")


@dataclass(order=True, eq=True)
class Cell:
    """A single cell; equality and ordering consider only ``column_index``."""

    column_index: int
    value: Optional[str] = field(default=None, compare=False)
    _row: Optional[weakref.ReferenceType] = field(
        default=None, init=False, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        _check_index(self.column_index, "column_index")
        if self.value is not None and not isinstance(self.value, str):
            raise TypeError(f"cell value must be str or None, got {type(self.value).__name__}")

    @classmethod
    def empty(cls, column_index: int) -> "Cell":
        """Build the padding cell used for columns without content."""

        return cls(column_index)

    @property
    def is_empty(self) -> bool:
        return self.value is None or self.value == ""

    @property
    def row(self) -> Optional["Row"]:
        return self._row() if self._row is not None else None


class Row:
    """Cells of one row, unique by column index."""

    def __init__(self, row_index: int) -> None:
        self._index = _check_index(row_index, "row_index")
        self._cells: Dict[int, Cell] = {}
        self._sheet: Optional[weakref.ReferenceType] = None

    def __repr__(self) -> str:
        return f"Row(row_index={self._index}, cells={len(self._cells)})"

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self._cells)

    @property
    def row_index(self) -> int:
        return self._index

    @property
    def sheet(self) -> Optional["Sheet"]:
        return self._sheet() if self._sheet is not None else None

    @property
    def cells(self) -> List[Cell]:
        return sorted(self._cells.values())

    def size_of_cells(self) -> int:
        return len(self._cells)

    def add_cell(self, cell: Cell) -> Cell:
        if cell.column_index in self._cells:
            raise DuplicateIndexError(
                f"row {self._index} already has a cell at column {cell.column_index}"
            )
        cell._row = weakref.ref(self)
        self._cells[cell.column_index] = cell
        return cell

    def get_cell(self, index: int) -> Cell:
        """Return the ``index``-th cell (1-based) in column order."""

        _check_position(index, len(self._cells))
        return self.cells[index - 1]

    def find_cell(self, column_index: int) -> Optional[Cell]:
        """Return the cell addressed by ``column_index``, if present."""

        return self._cells.get(column_index)

    @property
    def first_cell(self) -> Optional[Cell]:
        return self.get_cell(1) if self._cells else None

    @property
    def last_cell(self) -> Optional[Cell]:
        return self.get_cell(len(self._cells)) if self._cells else None

    def values(self) -> List[Optional[str]]:
        return [cell.value for cell in self.cells]


class Sheet:
    """Rows of one worksheet, unique by row index."""

    def __init__(self, sheet_index: int = 1, name: Optional[str] = None) -> None:
        self._index = _check_index(sheet_index, "sheet_index")
        self._name = name or None
        self._rows: Dict[int, Row] = {}
        self._workbook: Optional[weakref.ReferenceType] = None

    def __repr__(self) -> str:
        return f"Sheet(sheet_index={self._index}, name={self._name!r}, rows={len(self._rows)})"

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def sheet_index(self) -> int:
        return self._index

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def workbook(self) -> Optional["Workbook"]:
        return self._workbook() if self._workbook is not None else None

    @property
    def rows(self) -> List[Row]:
        return sorted(self._rows.values(), key=lambda row: row.row_index)

    def size_of_rows(self) -> int:
        return len(self._rows)

    def add_row(self, row: Row) -> Row:
        if row.row_index in self._rows:
            raise DuplicateIndexError(
                f"sheet {self._index} already has a row at index {row.row_index}"
            )
        row._sheet = weakref.ref(self)
        self._rows[row.row_index] = row
        return row

    def get_row(self, index: int) -> Row:
        """Return the ``index``-th row (1-based) in row order."""

        _check_position(index, len(self._rows))
        return self.rows[index - 1]

    def find_row(self, row_index: int) -> Optional[Row]:
        return self._rows.get(row_index)

    @property
    def first_row(self) -> Optional[Row]:
        return self.get_row(1) if self._rows else None

    @property
    def last_row(self) -> Optional[Row]:
        return self.get_row(len(self._rows)) if self._rows else None

    @property
    def last_column_index(self) -> int:
        """Highest column index populated in any row (0 when empty)."""

        return max(
            (cell.column_index for row in self._rows.values() for cell in row.cells),
            default=0,
        )


class Workbook:
    """Ordered collection of sheets; insertion order is preserved."""

    def __init__(self) -> None:
        self._sheets: List[Sheet] = []

    def __repr__(self) -> str:
        return f"Workbook(sheets={len(self._sheets)})"

    def __iter__(self) -> Iterator[Sheet]:
        return iter(list(self._sheets))

    def __len__(self) -> int:
        return len(self._sheets)

    @property
    def sheets(self) -> List[Sheet]:
        return list(self._sheets)

    def size_of_sheets(self) -> int:
        return len(self._sheets)

    def add_sheet(self, sheet: Sheet) -> Sheet:
        if self.find_sheet(sheet.sheet_index) is not None:
            raise DuplicateIndexError(f"workbook already has sheet {sheet.sheet_index}")
        sheet._workbook = weakref.ref(self)
        self._sheets.append(sheet)
        return sheet

    def get_sheet(self, index: int) -> Sheet:
        """Return the ``index``-th sheet (1-based) in insertion order."""

        _check_position(index, len(self._sheets))
        return self._sheets[index - 1]

    def find_sheet(self, sheet_index: int) -> Optional[Sheet]:
        for sheet in self._sheets:
            if sheet.sheet_index == sheet_index:
                return sheet
        return None

    @property
    def first_sheet(self) -> Optional[Sheet]:
        return self._sheets[0] if self._sheets else None

    @property
    def last_sheet(self) -> Optional[Sheet]:
        return self._sheets[-1] if self._sheets else None
