"""Load sheet metadata from YAML files."""

# Module responsibilities:
# - Validate YAML payloads against pydantic models before building SheetMeta.
# - Support single-sheet files and multi-sheet files with a ``sheets`` list.

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .meta import FieldMeta, FieldType, HeaderMeta, SheetMeta
from .utils.log import get_logger

logger = get_logger("meta_loader")


class FieldConfig(BaseModel):
    """One entry of the ``fields`` list."""

    model_config = ConfigDict(extra="forbid")

    name: str
    column: int = Field(ge=1)
    type: Optional[str] = None
    required: bool = False
    pattern: Optional[str] = None
    true_token: str = "true"
    false_token: str = "false"
    headers: Dict[int, str] = Field(default_factory=dict)

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            try:
                FieldType.parse(value)
            except ConfigurationError as exc:
                raise ValueError(str(exc)) from exc
        return value

    def to_meta(self) -> FieldMeta:
        return FieldMeta(
            name=self.name,
            column_index=self.column,
            header_metas=tuple(HeaderMeta(row, text) for row, text in self.headers.items()),
            type=FieldType.parse(self.type) if self.type else None,
            required=self.required,
            pattern=self.pattern,
            true_token=self.true_token,
            false_token=self.false_token,
        )


class SheetConfig(BaseModel):
    """Layout of one sheet as written in YAML."""

    model_config = ConfigDict(extra="forbid")

    sheet_index: int = Field(default=1, ge=1)
    sheet_name: Optional[str] = None
    data_start_row_index: int = Field(default=1, ge=1)
    fields: List[FieldConfig] = Field(default_factory=list)

    def to_meta(self) -> SheetMeta:
        return SheetMeta.of(
            (item.to_meta() for item in self.fields),
            data_start_row_index=self.data_start_row_index,
            sheet_index=self.sheet_index,
            sheet_name=self.sheet_name,
        )


class WorkbookConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    sheets: List[SheetConfig]


def _read_yaml(path: Path) -> object:
    if not path.exists():
        raise FileNotFoundError(f"Metadata file not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid metadata YAML {path}: {exc}") from exc


def parse_sheet_metas(payload: object) -> List[SheetMeta]:
    """Build sheet metas from an already loaded YAML payload."""

    if not isinstance(payload, dict):
        raise ConfigurationError("Invalid metadata YAML structure (expected mapping)")
    try:
        if "sheets" in payload:
            configs = WorkbookConfig.model_validate(payload).sheets
        else:
            configs = [SheetConfig.model_validate(payload)]
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid metadata: {exc}") from exc
    return [config.to_meta() for config in configs]


def load_sheet_metas(path: Path) -> List[SheetMeta]:
    """Load every sheet meta declared in ``path``."""

    metas = parse_sheet_metas(_read_yaml(Path(path)))
    logger.info(
        "Loaded sheet metadata",
        extra={"path": str(path), "sheets": [meta.sheet_index for meta in metas]},
    )
    return metas


def load_sheet_meta(path: Path) -> SheetMeta:
    """Load a file that declares exactly one sheet."""

    metas = load_sheet_metas(path)
    if len(metas) != 1:
        raise ConfigurationError(f"{path} declares {len(metas)} sheets, expected exactly one")
    return metas[0]
