"""Text -> typed value coercion for cell content."""

# Module responsibilities:
# - Convert one cell's text into the declared FieldType, raising ValueError on bad input.
# - Infer a FieldType from a target class annotation when metadata leaves it open.
# - Define the CoercionError record collected by the parse engine.

from __future__ import annotations

import re
import typing
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from .meta import FieldMeta, FieldType

INT_MIN, INT_MAX = -(2**31), 2**31 - 1
LONG_MIN, LONG_MAX = -(2**63), 2**63 - 1
FLOAT_MAX = 3.4028234663852886e38

_INTEGRAL = re.compile(r"[+-]?\d+")
_DECIMAL_TEXT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

REQUIRED_CAUSE = "value is required"


@dataclass(frozen=True)
class CoercionError:
    """One cell whose text could not be converted; collected, never raised."""

    row_index: int
    column_index: int
    field_name: str
    raw_value: Optional[str]
    target_type: FieldType
    cause: str

    def __str__(self) -> str:
        return (
            f"row {self.row_index}, column {self.column_index} ({self.field_name}): "
            f"cannot convert {self.raw_value!r} to {self.target_type.value}: {self.cause}"
        )


def _integral(text: str, low: int, high: int, label: str) -> int:
    if not _INTEGRAL.fullmatch(text):
        raise ValueError(f"'{text}' is not a base-10 {label}")
    value = int(text, 10)
    if value < low or value > high:
        raise ValueError(f"'{text}' is out of {label} range [{low}, {high}]")
    return value


def to_int(text: str, field_meta: FieldMeta) -> int:
    return _integral(text, INT_MIN, INT_MAX, "int")


def to_long(text: str, field_meta: FieldMeta) -> int:
    return _integral(text, LONG_MIN, LONG_MAX, "long")


def to_double(text: str, field_meta: FieldMeta) -> float:
    if not _DECIMAL_TEXT.fullmatch(text):
        raise ValueError(f"'{text}' is not a decimal number")
    value = float(text)
    if value in (float("inf"), float("-inf")):
        raise ValueError(f"'{text}' overflows double")
    return value


def to_float(text: str, field_meta: FieldMeta) -> float:
    value = to_double(text, field_meta)
    if abs(value) > FLOAT_MAX:
        raise ValueError(f"'{text}' overflows float")
    return value


def to_decimal(text: str, field_meta: FieldMeta) -> Decimal:
    if not _DECIMAL_TEXT.fullmatch(text):
        raise ValueError(f"'{text}' is not a decimal number")
    return Decimal(text)


def to_boolean(text: str, field_meta: FieldMeta, strict: bool = True) -> bool:
    token = text.lower()
    if token == field_meta.true_token.strip().lower():
        return True
    if token == field_meta.false_token.strip().lower() or not strict:
        return False
    raise ValueError(
        f"'{text}' is neither '{field_meta.true_token}' nor '{field_meta.false_token}'"
    )


def to_date(text: str, field_meta: FieldMeta) -> date:
    if field_meta.pattern:
        return datetime.strptime(text, field_meta.pattern).date()
    return date.fromisoformat(text)


def to_datetime(text: str, field_meta: FieldMeta) -> datetime:
    if field_meta.pattern:
        return datetime.strptime(text, field_meta.pattern)
    return datetime.fromisoformat(text)


def to_string(text: str, field_meta: FieldMeta) -> str:
    return text


_CONVERTERS: Dict[FieldType, Callable[[str, FieldMeta], Any]] = {
    FieldType.INT: to_int,
    FieldType.LONG: to_long,
    FieldType.FLOAT: to_float,
    FieldType.DOUBLE: to_double,
    FieldType.DECIMAL: to_decimal,
    FieldType.DATE: to_date,
    FieldType.DATETIME: to_datetime,
    FieldType.STRING: to_string,
}


def coerce(
    raw: Optional[str],
    field_type: FieldType,
    field_meta: FieldMeta,
    *,
    strict_booleans: bool = True,
) -> Any:
    """Convert ``raw`` cell text into ``field_type``.

    Empty text yields ``None`` for every type except string, which keeps
    ``""``. Required fields reject empty text.

    Raises:
        ValueError: When the text is not a valid token for the type.
    """

    text = "" if raw is None else raw
    if field_type is FieldType.STRING:
        if field_meta.required and text == "":
            raise ValueError(REQUIRED_CAUSE)
        return text

    text = text.strip()
    if text == "":
        if field_meta.required:
            raise ValueError(REQUIRED_CAUSE)
        return None
    if field_type is FieldType.BOOLEAN:
        return to_boolean(text, field_meta, strict=strict_booleans)
    return _CONVERTERS[field_type](text, field_meta)


_ANNOTATION_TYPES: Dict[Any, FieldType] = {
    bool: FieldType.BOOLEAN,
    int: FieldType.LONG,
    float: FieldType.DOUBLE,
    Decimal: FieldType.DECIMAL,
    str: FieldType.STRING,
    datetime: FieldType.DATETIME,
    date: FieldType.DATE,
}


def infer_field_types(target: Any) -> Dict[str, FieldType]:
    """Map annotated attribute names of ``target`` to field types.

    ``Optional[X]`` resolves to ``X``; unsupported annotations are skipped.
    """

    if not isinstance(target, type):
        return {}
    try:
        hints = typing.get_type_hints(target)
    except (NameError, TypeError):
        return {}
    inferred: Dict[str, FieldType] = {}
    for name, hint in hints.items():
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if typing.get_origin(hint) is not None and len(args) == 1:
            hint = args[0]
        field_type = _ANNOTATION_TYPES.get(hint)
        if field_type is not None:
            inferred[name] = field_type
    return inferred
