"""Parse the generic spreadsheet model back into typed objects.

The processor reads every data row of a sheet, coerces each field's cell into
its declared type and sets it on a freshly built object. Value-level failures
never abort the call: they are collected as :class:`CoercionError` records in
row-then-column order and returned alongside the partially populated objects.
Only structural problems (missing metadata, mismatched sheet) raise.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from .access import set_value
from .coercion import CoercionError, coerce, infer_field_types
from .config import load_settings
from .errors import ConfigurationError, CorrespondenceError
from .meta import FieldMeta, FieldType, SheetMeta
from .model import Sheet, Workbook
from .utils.log import get_logger

logger = get_logger("processor")

ObjectFactory = Callable[[], Any]


class FieldValueSetter(ABC):
    """Custom parse step for one field, replacing type coercion."""

    def __init__(self, match_field: str) -> None:
        self.match_field = match_field

    @abstractmethod
    def set_value(self, obj: Any, field_meta: FieldMeta, raw: Optional[str]) -> None:
        """Set the field from ``raw`` text; raise ``ValueError`` to report bad input."""


@dataclass
class ParseResult:
    """Objects parsed from one sheet plus the coercion errors met on the way."""

    sheet_index: int
    objects: List[Any] = field(default_factory=list)
    errors: List[CoercionError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def errors_by_row(self) -> Dict[int, List[CoercionError]]:
        grouped: Dict[int, List[CoercionError]] = {}
        for error in self.errors:
            grouped.setdefault(error.row_index, []).append(error)
        return grouped


class SheetProcessor:
    """Turn the data rows of a sheet into objects built by ``factory``.

    Args:
        sheet_meta: Layout of the sheet to read.
        factory: No-argument callable creating an empty target object.
            Field types left open in the metadata are inferred from its
            annotations when it is a class.
        setters: Per-field overrides of the coercion step.
        strict_booleans: Whether unknown boolean tokens are errors; defaults
            to the ``SHEETMAPPER_STRICT_BOOLEANS`` setting.
    """

    def __init__(
        self,
        sheet_meta: Optional[SheetMeta],
        factory: ObjectFactory = dict,
        setters: Iterable[FieldValueSetter] = (),
        strict_booleans: Optional[bool] = None,
    ) -> None:
        if sheet_meta is None:
            raise ConfigurationError("set sheet meta first")
        self.sheet_meta = sheet_meta
        self.factory = factory
        self._setters: Dict[str, FieldValueSetter] = {s.match_field: s for s in setters}
        if strict_booleans is None:
            strict_booleans = load_settings().strict_booleans
        self.strict_booleans = strict_booleans
        inferred = infer_field_types(factory)
        self._types: Dict[str, FieldType] = {
            meta.name: meta.type or inferred.get(meta.name, FieldType.STRING)
            for meta in sheet_meta.field_metas
        }

    def field_type(self, name: str) -> FieldType:
        return self._types[name]

    def process(self, sheet: Sheet) -> ParseResult:
        meta = self.sheet_meta
        if sheet.sheet_index != meta.sheet_index:
            raise CorrespondenceError(
                f"sheet[sheet index:{sheet.sheet_index}] not corresponding the sheet "
                f"meta[sheet index:{meta.sheet_index}]"
            )

        result = ParseResult(sheet_index=meta.sheet_index)
        for row in sheet.rows:
            if row.row_index < meta.data_start_row_index:
                continue
            obj = self.factory()
            for field_meta in meta.field_metas:
                cell = row.find_cell(field_meta.column_index)
                raw = cell.value if cell is not None else None
                error = self._apply(obj, field_meta, raw, row.row_index)
                if error is not None:
                    result.errors.append(error)
            result.objects.append(obj)

        logger.info(
            "Parsed sheet",
            extra={
                "sheet_index": meta.sheet_index,
                "objects": len(result.objects),
                "errors": len(result.errors),
            },
        )
        return result

    def _apply(
        self, obj: Any, field_meta: FieldMeta, raw: Optional[str], row_index: int
    ) -> Optional[CoercionError]:
        field_type = self._types[field_meta.name]
        setter = self._setters.get(field_meta.name)
        try:
            if setter is not None:
                setter.set_value(obj, field_meta, raw)
            else:
                value = coerce(raw, field_type, field_meta, strict_booleans=self.strict_booleans)
                set_value(obj, field_meta.name, value)
        except (ValueError, TypeError) as exc:
            error = CoercionError(
                row_index=row_index,
                column_index=field_meta.column_index,
                field_name=field_meta.name,
                raw_value=raw,
                target_type=field_type,
                cause=str(exc),
            )
            logger.debug("Coercion failed: %s", error)
            return error
        return None


def parse_sheet(
    sheet: Sheet,
    sheet_meta: SheetMeta,
    factory: ObjectFactory = dict,
    setters: Iterable[FieldValueSetter] = (),
    strict_booleans: Optional[bool] = None,
) -> ParseResult:
    """Parse ``sheet`` laid out by ``sheet_meta`` into objects and errors."""

    return SheetProcessor(sheet_meta, factory, setters, strict_booleans).process(sheet)


class WorkbookProcessor:
    """Run one :class:`SheetProcessor` per sheet of a workbook."""

    def __init__(self, processors: Sequence[SheetProcessor]) -> None:
        if not processors:
            raise ConfigurationError("no sheet processors registered")
        self._processors = list(processors)

    def process(self, workbook: Workbook) -> List[ParseResult]:
        """Return one result per processor, in registration order.

        Raises:
            CorrespondenceError: When the workbook lacks a sheet a processor expects.
        """

        results: List[ParseResult] = []
        for processor in self._processors:
            sheet_index = processor.sheet_meta.sheet_index
            sheet = workbook.find_sheet(sheet_index)
            if sheet is None:
                raise CorrespondenceError(f"workbook has no sheet with index {sheet_index}")
            results.append(processor.process(sheet))
        return results
