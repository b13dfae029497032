"""Filesystem helpers for the sheetmapper workspace structure."""

# Module responsibilities:
# - Define the default ~/SheetMapper directory layout and create folders on demand.
# - Offer small helpers to resolve output paths without overwriting inputs accidentally.

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from sheetmapper.config import load_settings

_SUBDIRS: tuple[str, ...] = ("out", "logs")


def resolve_home(base: Optional[Path] = None) -> Path:
    """Return the workspace root, honouring ``SHEETMAPPER_HOME``."""

    if base is not None:
        return Path(base).expanduser().resolve()
    return load_settings().home


def ensure_default_structure(base: Optional[Path] = None) -> Dict[str, Path]:
    """Ensure the default workspace structure exists.

    Args:
        base: Optional override for the workspace base directory.

    Returns:
        Mapping with keys ``base``, ``out`` and ``logs``.
    """

    target_base = resolve_home(base)
    target_base.mkdir(parents=True, exist_ok=True)
    paths = {"base": target_base}
    for name in _SUBDIRS:
        path = target_base / name
        path.mkdir(parents=True, exist_ok=True)
        paths[name] = path
    return paths


def prepare_output_path(filename: str, base: Optional[Path] = None) -> Path:
    """Prepare an output path inside the workspace ``out`` directory."""

    paths = ensure_default_structure(base)
    return paths["out"] / filename
