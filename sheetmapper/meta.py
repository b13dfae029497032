"""Declarative column metadata driving compose and parse."""

# Module responsibilities:
# - Describe per-field column placement, header texts and declared value type.
# - Describe sheet-level layout (identity, header/data boundary).
# - Reject structurally invalid layouts at construction time.

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

from .errors import ConfigurationError


class FieldType(str, Enum):
    """Semantic value types a cell can be coerced into."""

    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    DECIMAL = "decimal"
    STRING = "string"
    DATE = "date"
    DATETIME = "datetime"

    @classmethod
    def parse(cls, value: "FieldType | str") -> "FieldType":
        if isinstance(value, FieldType):
            return value
        token = str(value).strip().lower()
        aliases = {"integer": "int", "bool": "boolean", "str": "string", "bigdecimal": "decimal"}
        token = aliases.get(token, token)
        try:
            return cls(token)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown field type: {value!r}") from exc


def _positive(value: int, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError(f"{label} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class HeaderMeta:
    """Header text shown at ``row_index`` above a field's column."""

    row_index: int
    text: str

    def __post_init__(self) -> None:
        _positive(self.row_index, "header row_index")


@dataclass(frozen=True)
class FieldMeta:
    """Binding between an object field and a spreadsheet column.

    Attributes:
        name: Attribute (or mapping key) name on the domain object.
        column_index: 1-based column holding the field.
        header_metas: Header texts, at most one per header row.
        type: Declared value type; ``None`` infers it from the target class.
        required: Whether an empty cell is a coercion error.
        pattern: ``strftime``/``strptime`` format for date and datetime fields.
        true_token: Text representing ``True`` for boolean fields.
        false_token: Text representing ``False`` for boolean fields.
    """

    name: str
    column_index: int
    header_metas: Tuple[HeaderMeta, ...] = ()
    type: Optional[FieldType] = None
    required: bool = False
    pattern: Optional[str] = None
    true_token: str = "true"
    false_token: str = "false"

    def __post_init__(self) -> None:
        if not self.name or not str(self.name).strip():
            raise ConfigurationError("field name must not be blank")
        _positive(self.column_index, f"column_index of field '{self.name}'")
        if self.type is not None:
            object.__setattr__(self, "type", FieldType.parse(self.type))
        headers = tuple(sorted(self.header_metas, key=lambda meta: meta.row_index))
        seen: set[int] = set()
        for header in headers:
            if header.row_index in seen:
                raise ConfigurationError(
                    f"field '{self.name}' declares two headers for row {header.row_index}"
                )
            seen.add(header.row_index)
        object.__setattr__(self, "header_metas", headers)
        if self.true_token.strip().lower() == self.false_token.strip().lower():
            raise ConfigurationError(
                f"field '{self.name}' uses the same token for true and false"
            )

    def get_header_meta(self, row_index: int) -> Optional[HeaderMeta]:
        for header in self.header_metas:
            if header.row_index == row_index:
                return header
        return None

    def with_header(self, row_index: int, text: str) -> "FieldMeta":
        """Return a copy carrying an extra header."""

        return replace(self, header_metas=self.header_metas + (HeaderMeta(row_index, text),))


@dataclass(frozen=True)
class SheetMeta:
    """Layout of one sheet; rows before ``data_start_row_index`` are headers."""

    data_start_row_index: int = 1
    field_metas: Tuple[FieldMeta, ...] = ()
    sheet_index: int = 1
    sheet_name: Optional[str] = None
    _by_column: Dict[int, FieldMeta] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )
    _by_name: Dict[str, FieldMeta] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        _positive(self.data_start_row_index, "data_start_row_index")
        _positive(self.sheet_index, "sheet_index")
        metas = tuple(sorted(self.field_metas, key=lambda meta: meta.column_index))
        by_column: Dict[int, FieldMeta] = {}
        by_name: Dict[str, FieldMeta] = {}
        for meta in metas:
            if meta.name in by_name:
                raise ConfigurationError(f"duplicate field name '{meta.name}'")
            if meta.column_index in by_column:
                other = by_column[meta.column_index]
                raise ConfigurationError(
                    f"fields '{other.name}' and '{meta.name}' share column {meta.column_index}"
                )
            for header in meta.header_metas:
                if header.row_index >= self.data_start_row_index:
                    raise ConfigurationError(
                        f"header row {header.row_index} of field '{meta.name}' is not "
                        f"before data start row {self.data_start_row_index}"
                    )
            by_column[meta.column_index] = meta
            by_name[meta.name] = meta
        object.__setattr__(self, "field_metas", metas)
        object.__setattr__(self, "_by_column", by_column)
        object.__setattr__(self, "_by_name", by_name)

    @classmethod
    def of(
        cls,
        field_metas: Iterable[FieldMeta],
        *,
        data_start_row_index: int = 1,
        sheet_index: int = 1,
        sheet_name: Optional[str] = None,
    ) -> "SheetMeta":
        return cls(
            data_start_row_index=data_start_row_index,
            field_metas=tuple(field_metas),
            sheet_index=sheet_index,
            sheet_name=sheet_name,
        )

    @property
    def header_row_count(self) -> int:
        return self.data_start_row_index - 1

    @property
    def last_column_index(self) -> int:
        return max((meta.column_index for meta in self.field_metas), default=0)

    def field_at(self, column_index: int) -> Optional[FieldMeta]:
        return self._by_column.get(column_index)

    def get_field_meta(self, name: str) -> Optional[FieldMeta]:
        return self._by_name.get(name)
