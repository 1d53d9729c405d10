from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bookshelf.core.rate_limiter import reset_rate_limits  # noqa: E402


@pytest.fixture()
def write_catalog(tmp_path):
    """Write a list of book dicts to a temporary catalog file and return its path."""

    def _write(records, name: str = "books.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(records), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _clear_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()
