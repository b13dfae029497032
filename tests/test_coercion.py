"""Unit tests for per-type cell coercion."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from sheetmapper.coercion import REQUIRED_CAUSE, coerce, infer_field_types
from sheetmapper.meta import FieldMeta, FieldType


def _meta(**kwargs: object) -> FieldMeta:
    return FieldMeta("value", 1, **kwargs)


@pytest.mark.parametrize(
    ("raw", "field_type", "expected"),
    [
        ("10000", FieldType.INT, 10000),
        ("-20000", FieldType.INT, -20000),
        ("+7", FieldType.INT, 7),
        ("2147483647", FieldType.INT, 2147483647),
        ("10000000000000", FieldType.LONG, 10000000000000),
        ("0.001", FieldType.FLOAT, 0.001),
        (".5", FieldType.DOUBLE, 0.5),
        ("0.00000000000000000001", FieldType.DOUBLE, 1e-20),
        ("1.0E-20", FieldType.DECIMAL, Decimal("1.0E-20")),
        ("12.50", FieldType.DECIMAL, Decimal("12.50")),
        ("Scarlett Johansson", FieldType.STRING, "Scarlett Johansson"),
        ("2024-05-10", FieldType.DATE, date(2024, 5, 10)),
        ("2024-05-10T08:30:00", FieldType.DATETIME, datetime(2024, 5, 10, 8, 30)),
    ],
)
def test_valid_tokens(raw: str, field_type: FieldType, expected: object) -> None:
    assert coerce(raw, field_type, _meta()) == expected


@pytest.mark.parametrize(
    ("raw", "field_type"),
    [
        ("dasdasd", FieldType.INT),
        ("1.5", FieldType.INT),
        ("1_000", FieldType.INT),
        ("2147483648", FieldType.INT),
        ("afsdfasdf", FieldType.LONG),
        ("9223372036854775808", FieldType.LONG),
        ("0.asfadsf", FieldType.FLOAT),
        ("1e39", FieldType.FLOAT),
        ("0.345dfasd", FieldType.DOUBLE),
        ("nan", FieldType.DOUBLE),
        ("1,5", FieldType.DOUBLE),
        ("Infinity", FieldType.DECIMAL),
        ("abc", FieldType.DECIMAL),
        ("1_000", FieldType.DECIMAL),
        ("10/05/2024", FieldType.DATE),
    ],
)
def test_invalid_tokens_raise_value_error(raw: str, field_type: FieldType) -> None:
    with pytest.raises(ValueError):
        coerce(raw, field_type, _meta())


@pytest.mark.parametrize(
    "field_type",
    [FieldType.INT, FieldType.LONG, FieldType.FLOAT, FieldType.DOUBLE, FieldType.DECIMAL,
     FieldType.BOOLEAN, FieldType.DATE],
)
def test_empty_text_is_no_value(field_type: FieldType) -> None:
    assert coerce("", field_type, _meta()) is None
    assert coerce(None, field_type, _meta()) is None
    assert coerce("   ", field_type, _meta()) is None


def test_empty_string_field_keeps_empty_string() -> None:
    assert coerce("", FieldType.STRING, _meta()) == ""
    assert coerce(None, FieldType.STRING, _meta()) == ""


@pytest.mark.parametrize("field_type", [FieldType.INT, FieldType.LONG, FieldType.STRING])
def test_required_fields_reject_empty_text(field_type: FieldType) -> None:
    with pytest.raises(ValueError, match=REQUIRED_CAUSE):
        coerce("", field_type, _meta(required=True))


def test_boolean_vocabulary_strict_and_lenient() -> None:
    meta = _meta(true_token="pass", false_token="failure")

    assert coerce("pass", FieldType.BOOLEAN, meta) is True
    assert coerce("PASS ", FieldType.BOOLEAN, meta) is True
    assert coerce("failure", FieldType.BOOLEAN, meta) is False
    with pytest.raises(ValueError, match="neither 'pass' nor 'failure'"):
        coerce("t", FieldType.BOOLEAN, meta)
    assert coerce("t", FieldType.BOOLEAN, meta, strict_booleans=False) is False


def test_date_pattern_is_honoured() -> None:
    meta = _meta(pattern="%d/%m/%Y")

    assert coerce("10/05/2024", FieldType.DATE, meta) == date(2024, 5, 10)
    with pytest.raises(ValueError):
        coerce("2024-05-10", FieldType.DATE, meta)


@dataclass
class _Annotated:
    count: Optional[int] = None
    ratio: float = 0.0
    flag: bool = False
    amount: Optional[Decimal] = None
    label: str = ""
    when: Optional[date] = None
    stamp: Optional[datetime] = None
    extra: Optional[list] = None


def test_infer_field_types_from_annotations() -> None:
    inferred = infer_field_types(_Annotated)

    assert inferred == {
        "count": FieldType.LONG,
        "ratio": FieldType.DOUBLE,
        "flag": FieldType.BOOLEAN,
        "amount": FieldType.DECIMAL,
        "label": FieldType.STRING,
        "when": FieldType.DATE,
        "stamp": FieldType.DATETIME,
    }
    assert infer_field_types(dict) == {}
    assert infer_field_types(lambda: {}) == {}
