"""Unit tests for runtime settings and logging setup."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

import pytest

from sheetmapper.config import load_settings
from sheetmapper.errors import ConfigurationError
from sheetmapper.utils.log import get_logger, set_level
from sheetmapper.utils.paths import ensure_default_structure, prepare_output_path


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SHEETMAPPER_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("SHEETMAPPER_LOG_LEVEL", "debug")
    monkeypatch.setenv("SHEETMAPPER_STRICT_BOOLEANS", "no")

    settings = load_settings()

    assert settings.home == (tmp_path / "home").resolve()
    assert settings.log_level == "DEBUG"
    assert settings.strict_booleans is False


def test_strict_booleans_defaults_on(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SHEETMAPPER_STRICT_BOOLEANS", raising=False)

    assert load_settings().strict_booleans is True


def test_bad_flag_is_configuration_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHEETMAPPER_STRICT_BOOLEANS", "maybe")

    with pytest.raises(ConfigurationError):
        load_settings()


def test_workspace_structure(tmp_path: Path) -> None:
    paths = ensure_default_structure(tmp_path / "ws")

    assert paths["logs"].is_dir()
    assert paths["out"].is_dir()
    assert prepare_output_path("a.xlsx", tmp_path / "ws") == paths["out"] / "a.xlsx"


def test_loggers_share_package_namespace() -> None:
    logger = get_logger("tests")

    assert logger.name == "sheetmapper.tests"
    root = logging.getLogger("sheetmapper")
    assert root.propagate is False
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)

    set_level("WARNING")
    assert root.level == logging.WARNING
    set_level("INFO")
    with pytest.raises(ValueError):
        set_level("chatty")
