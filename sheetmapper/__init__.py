"""`sheetmapper` maps spreadsheet documents to typed objects using column metadata."""

# Module responsibilities:
# - Re-export the document model, metadata, compose and parse entry points so consumers
#   have a stable API surface.

from __future__ import annotations

from .coercion import CoercionError
from .composer import SheetComposer, SheetList, WorkbookComposer, compose_sheet
from .errors import (
    ComposeError,
    ConfigurationError,
    CorrespondenceError,
    DuplicateIndexError,
    IndexOutOfBoundsError,
    SheetMapperError,
    SourceFormatError,
)
from .extractors import (
    AttributeValueExtractor,
    BooleanValueExtractor,
    FieldValueExtractor,
    FormattingValueExtractor,
    ValueExtractor,
)
from .meta import FieldMeta, FieldType, HeaderMeta, SheetMeta
from .meta_loader import load_sheet_meta, load_sheet_metas
from .model import Cell, Row, Sheet, Workbook
from .processor import (
    FieldValueSetter,
    ParseResult,
    SheetProcessor,
    WorkbookProcessor,
    parse_sheet,
)

__all__ = [
    "Cell",
    "Row",
    "Sheet",
    "Workbook",
    "FieldType",
    "HeaderMeta",
    "FieldMeta",
    "SheetMeta",
    "load_sheet_meta",
    "load_sheet_metas",
    "ValueExtractor",
    "AttributeValueExtractor",
    "FieldValueExtractor",
    "BooleanValueExtractor",
    "FormattingValueExtractor",
    "SheetList",
    "SheetComposer",
    "WorkbookComposer",
    "compose_sheet",
    "CoercionError",
    "FieldValueSetter",
    "ParseResult",
    "SheetProcessor",
    "WorkbookProcessor",
    "parse_sheet",
    "SheetMapperError",
    "ConfigurationError",
    "CorrespondenceError",
    "IndexOutOfBoundsError",
    "DuplicateIndexError",
    "ComposeError",
    "SourceFormatError",
]

__version__ = "0.1.0"
