"""Value extractors turning object fields into cell text."""

# Module responsibilities:
# - Define the extractor interface used by the compose engine.
# - Provide the default attribute-based extractor with per-type formatting.
# - Provide field-bound extractors that override the default for one field name.

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional

from .access import get_value
from .meta import FieldMeta, FieldType


def format_value(value: Any, field_meta: FieldMeta) -> Optional[str]:
    """Render a Python value as cell text using the field's settings."""

    if value is None:
        return None
    if isinstance(value, bool):
        return field_meta.true_token if value else field_meta.false_token
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, datetime):
        return value.strftime(field_meta.pattern) if field_meta.pattern else value.isoformat()
    if isinstance(value, date):
        if field_meta.pattern:
            return value.strftime(field_meta.pattern)
        if field_meta.type is FieldType.DATETIME:
            return datetime.combine(value, datetime.min.time()).isoformat()
        return value.isoformat()
    return str(value)


class ValueExtractor(ABC):
    """Strategy converting one field of an object into cell text."""

    @abstractmethod
    def get_string_value(self, obj: Any, field_meta: FieldMeta) -> Optional[str]:
        """Return the text for ``field_meta`` on ``obj`` (``None`` for no value)."""


class AttributeValueExtractor(ValueExtractor):
    """Default extractor: read the field by name and format it."""

    def get_string_value(self, obj: Any, field_meta: FieldMeta) -> Optional[str]:
        return format_value(get_value(obj, field_meta.name), field_meta)


class FieldValueExtractor(ValueExtractor):
    """Extractor registered for a single field name."""

    def __init__(self, match_field: str) -> None:
        self.match_field = match_field

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(match_field={self.match_field!r})"


class BooleanValueExtractor(FieldValueExtractor):
    """Render a boolean field with its own vocabulary, e.g. ``pass``/``failure``."""

    def __init__(self, match_field: str, true_token: str, false_token: str) -> None:
        super().__init__(match_field)
        self.true_token = true_token
        self.false_token = false_token

    def get_string_value(self, obj: Any, field_meta: FieldMeta) -> Optional[str]:
        value = get_value(obj, field_meta.name)
        if value is None:
            return None
        return self.true_token if bool(value) else self.false_token


class FormattingValueExtractor(FieldValueExtractor):
    """Apply ``func`` to the raw field value; ``None`` values stay empty."""

    def __init__(self, match_field: str, func: Callable[[Any], Optional[str]]) -> None:
        super().__init__(match_field)
        self.func = func

    def get_string_value(self, obj: Any, field_meta: FieldMeta) -> Optional[str]:
        value = get_value(obj, field_meta.name)
        if value is None:
            return None
        return self.func(value)
