"""Unit tests for value extractors and attribute access."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from types import SimpleNamespace

import pytest

from sheetmapper.access import get_value, set_value
from sheetmapper.extractors import AttributeValueExtractor, format_value
from sheetmapper.meta import FieldMeta, FieldType


class Colour(Enum):
    RED = "red"


@pytest.mark.parametrize(
    ("value", "meta", "expected"),
    [
        (None, FieldMeta("v", 1), None),
        (True, FieldMeta("v", 1), "true"),
        (False, FieldMeta("v", 1, true_token="pass", false_token="failure"), "failure"),
        (10000, FieldMeta("v", 1), "10000"),
        (0.1, FieldMeta("v", 1), "0.1"),
        (Decimal("1.0E-20"), FieldMeta("v", 1), "1.0E-20"),
        (Colour.RED, FieldMeta("v", 1), "red"),
        (date(2024, 5, 10), FieldMeta("v", 1), "2024-05-10"),
        (date(2024, 5, 10), FieldMeta("v", 1, type=FieldType.DATETIME), "2024-05-10T00:00:00"),
        (datetime(2024, 5, 10, 8, 30), FieldMeta("v", 1), "2024-05-10T08:30:00"),
        (datetime(2024, 5, 10, 8, 30), FieldMeta("v", 1, pattern="%Y/%m/%d %H:%M"), "2024/05/10 08:30"),
        ("text", FieldMeta("v", 1), "text"),
    ],
)
def test_format_value(value: object, meta: FieldMeta, expected: object) -> None:
    assert format_value(value, meta) == expected


@dataclass
class Owner:
    name: str = "Ada"


@dataclass
class Account:
    owner: Owner = field(default_factory=Owner)
    balance: int = 0


def test_get_value_supports_attributes_mappings_and_paths() -> None:
    account = Account()

    assert get_value(account, "balance") == 0
    assert get_value(account, "owner.name") == "Ada"
    assert get_value({"owner": {"name": "Alan"}}, "owner.name") == "Alan"
    assert get_value(SimpleNamespace(owner=None), "owner.name") is None
    assert get_value(account, "missing") is None


def test_set_value_on_objects_and_mappings() -> None:
    account = Account()
    record: dict[str, object] = {}

    set_value(account, "balance", 5)
    set_value(record, "balance", 7)

    assert account.balance == 5
    assert record == {"balance": 7}


def test_attribute_extractor_reads_nested_paths() -> None:
    extractor = AttributeValueExtractor()

    assert extractor.get_string_value(Account(), FieldMeta("owner.name", 1)) == "Ada"
    assert extractor.get_string_value(Account(balance=3), FieldMeta("balance", 2)) == "3"
