"""Compose typed objects into the generic spreadsheet model."""

# Module responsibilities:
# - Render header rows and one data row per object from a SheetMeta.
# - Resolve per-field extractors by name, falling back to attribute access.
# - Pad every column up to the last declared one so gaps are never skipped.

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from .errors import ComposeError, ConfigurationError, CorrespondenceError
from .extractors import AttributeValueExtractor, FieldValueExtractor, ValueExtractor
from .meta import FieldMeta, SheetMeta
from .model import Cell, Row, Sheet, Workbook
from .utils.log import get_logger

logger = get_logger("composer")


class SheetList(list):
    """List of objects tagged with the sheet index they belong to."""

    def __init__(self, items: Iterable[Any] = (), sheet_index: int = 1) -> None:
        super().__init__(items)
        self.sheet_index = sheet_index

    def __repr__(self) -> str:
        return f"SheetList(sheet_index={self.sheet_index}, items={list.__repr__(self)})"


class SheetComposer:
    """Build a :class:`Sheet` from a :class:`SheetMeta` and a list of objects.

    Instances keep per-call state; use one composer per compose call when
    composing concurrently.
    """

    def __init__(
        self,
        sheet_meta: Optional[SheetMeta] = None,
        data: Optional[Sequence[Any]] = None,
        extractors: Iterable[FieldValueExtractor] = (),
        default_extractor: Optional[ValueExtractor] = None,
    ) -> None:
        self._sheet_meta = sheet_meta
        self._data = data
        self._extractors: Dict[str, FieldValueExtractor] = {}
        self._default_extractor = default_extractor or AttributeValueExtractor()
        self.field_value_extractor(*extractors)

    def sheet_meta(self, sheet_meta: SheetMeta) -> "SheetComposer":
        self._sheet_meta = sheet_meta
        return self

    def data(self, data: Optional[Sequence[Any]]) -> "SheetComposer":
        self._data = data
        return self

    def field_value_extractor(self, *extractors: FieldValueExtractor) -> "SheetComposer":
        """Register extractors; a later one for the same field replaces the earlier."""

        for extractor in extractors:
            self._extractors[extractor.match_field] = extractor
        return self

    def compose(self) -> Sheet:
        meta = self._sheet_meta
        if meta is None:
            raise ConfigurationError("set sheet meta first")

        sheet = Sheet(meta.sheet_index, meta.sheet_name)
        last_column = meta.last_column_index

        for row_index in range(1, meta.data_start_row_index):
            row = sheet.add_row(Row(row_index))
            self._add_header_cells(row, meta, last_column)

        data = self._data
        if not data:
            logger.info(
                "Composed header-only sheet",
                extra={"sheet_index": meta.sheet_index, "header_rows": meta.header_row_count},
            )
            return sheet

        data_sheet_index = getattr(data, "sheet_index", meta.sheet_index)
        if data_sheet_index != meta.sheet_index:
            raise CorrespondenceError(
                f"data[sheet index:{data_sheet_index}] not corresponding the sheet "
                f"meta[sheet index:{meta.sheet_index}]"
            )

        for position, obj in enumerate(data):
            row = sheet.add_row(Row(position + meta.data_start_row_index))
            self._add_data_cells(row, obj, meta, last_column)

        logger.info(
            "Composed sheet",
            extra={
                "sheet_index": meta.sheet_index,
                "header_rows": meta.header_row_count,
                "data_rows": len(data),
                "columns": last_column,
            },
        )
        return sheet

    def _add_header_cells(self, row: Row, meta: SheetMeta, last_column: int) -> None:
        for column in range(1, last_column + 1):
            field_meta = meta.field_at(column)
            header = field_meta.get_header_meta(row.row_index) if field_meta else None
            if header is None:
                row.add_cell(Cell.empty(column))
            else:
                row.add_cell(Cell(column, header.text))

    def _add_data_cells(self, row: Row, obj: Any, meta: SheetMeta, last_column: int) -> None:
        for column in range(1, last_column + 1):
            field_meta = meta.field_at(column)
            if field_meta is None:
                row.add_cell(Cell.empty(column))
                continue
            row.add_cell(Cell(column, self._string_value(obj, field_meta, row.row_index)))

    def _string_value(self, obj: Any, field_meta: FieldMeta, row_index: int) -> Optional[str]:
        extractor = self._extractors.get(field_meta.name, self._default_extractor)
        try:
            return extractor.get_string_value(obj, field_meta)
        except Exception as exc:  # noqa: BLE001 - any extractor failure aborts the call
            logger.error(
                "Value extraction failed",
                extra={"field": field_meta.name, "row": row_index, "error": str(exc)},
            )
            raise ComposeError(
                f"failed to extract field '{field_meta.name}' for row {row_index}: {exc}"
            ) from exc


def compose_sheet(
    sheet_meta: SheetMeta,
    data: Optional[Sequence[Any]] = None,
    extractors: Iterable[FieldValueExtractor] = (),
) -> Sheet:
    """Compose ``data`` into a sheet laid out by ``sheet_meta``."""

    return SheetComposer(sheet_meta, data, extractors).compose()


class WorkbookComposer:
    """Compose several sheets, in registration order, into one workbook."""

    def __init__(self, composers: Iterable[SheetComposer] = ()) -> None:
        self._composers: List[SheetComposer] = list(composers)

    def sheet_composer(self, *composers: SheetComposer) -> "WorkbookComposer":
        self._composers.extend(composers)
        return self

    def compose(self) -> Workbook:
        if not self._composers:
            raise ConfigurationError("no sheet composers registered")
        workbook = Workbook()
        for composer in self._composers:
            workbook.add_sheet(composer.compose())
        return workbook
