"""Unit tests for field and sheet metadata."""

from __future__ import annotations

import pytest

from sheetmapper.errors import ConfigurationError
from sheetmapper.meta import FieldMeta, FieldType, HeaderMeta, SheetMeta


def test_sheet_meta_sorts_fields_and_indexes_columns() -> None:
    meta = SheetMeta.of(
        [FieldMeta("b", 3), FieldMeta("a", 1)],
        data_start_row_index=2,
        sheet_name="people",
    )

    assert [field.name for field in meta.field_metas] == ["a", "b"]
    assert meta.last_column_index == 3
    assert meta.field_at(3).name == "b"
    assert meta.field_at(2) is None
    assert meta.get_field_meta("a").column_index == 1
    assert meta.header_row_count == 1


def test_duplicate_column_index_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="share column 1"):
        SheetMeta.of([FieldMeta("a", 1), FieldMeta("b", 1)])


def test_duplicate_field_name_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="duplicate field name"):
        SheetMeta.of([FieldMeta("a", 1), FieldMeta("a", 2)])


def test_header_rows_must_precede_data() -> None:
    field = FieldMeta("a", 1, header_metas=(HeaderMeta(2, "A"),))
    with pytest.raises(ConfigurationError, match="not before data start row"):
        SheetMeta.of([field], data_start_row_index=2)


@pytest.mark.parametrize("value", [0, -3])
def test_indices_must_be_positive(value: int) -> None:
    with pytest.raises(ConfigurationError):
        FieldMeta("a", value)
    with pytest.raises(ConfigurationError):
        SheetMeta(data_start_row_index=value)
    with pytest.raises(ConfigurationError):
        HeaderMeta(value, "A")


def test_field_meta_headers_and_type_parsing() -> None:
    field = FieldMeta("age", 2, type="integer").with_header(2, "years").with_header(1, "Age")

    assert field.type is FieldType.INT
    assert [header.row_index for header in field.header_metas] == [1, 2]
    assert field.get_header_meta(1).text == "Age"
    assert field.get_header_meta(3) is None

    with pytest.raises(ConfigurationError):
        field.with_header(1, "again")


def test_unknown_type_and_ambiguous_boolean_tokens_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Unknown field type"):
        FieldMeta("a", 1, type="money")
    with pytest.raises(ConfigurationError, match="same token"):
        FieldMeta("a", 1, true_token="Y", false_token="y")


def test_metadata_is_immutable() -> None:
    meta = SheetMeta.of([FieldMeta("a", 1)])
    with pytest.raises(AttributeError):
        meta.sheet_index = 2  # type: ignore[misc]
