from __future__ import annotations

import faulthandler
import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

faulthandler.enable()  # Ensure crashes emit tracebacks.

# Keep log files out of the user's home directory; must run before sheetmapper is imported.
os.environ["SHEETMAPPER_HOME"] = tempfile.mkdtemp(prefix="sheetmapper-tests-")
os.environ.pop("SHEETMAPPER_STRICT_BOOLEANS", None)

from mapper_factory import build_sheet, build_sheet_meta  # noqa: E402

from sheetmapper.meta import SheetMeta  # noqa: E402
from sheetmapper.model import Sheet  # noqa: E402


@pytest.fixture
def sheet_meta() -> SheetMeta:
    return build_sheet_meta(with_header=True)


@pytest.fixture
def headless_sheet_meta() -> SheetMeta:
    return build_sheet_meta(with_header=False)


@pytest.fixture
def fixture_sheet() -> Sheet:
    return build_sheet()
