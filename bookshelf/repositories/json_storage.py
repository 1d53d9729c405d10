"""
JSON file codec shared by the book and credential repositories.

Each store is one UTF-8 document holding a JSON array. Reads parse the whole
file; writes replace the whole file through a temporary sibling and an
atomic rename so a crash mid-write never leaves a truncated document behind.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


class StorageError(Exception):
    """Base class for persistence failures."""

    def __init__(self, message: str, path: Path | str):
        super().__init__(f"{message}: {path}")
        self.message = message
        self.path = Path(path)


class StorageReadError(StorageError):
    """File missing, unreadable or not accessible."""


class StorageFormatError(StorageError):
    """Contents do not deserialize into the expected shape."""


class StorageWriteError(StorageError):
    """Whole-file overwrite could not complete."""


_MISSING: Any = object()


def read_document(path: Path | str, *, default: Any = _MISSING) -> Any:
    """Parse the JSON document at path; a missing file returns default when one is given."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        if default is not _MISSING:
            return default
        raise StorageReadError("Data file not found", path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise StorageReadError("Failed to read data file", path) from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise StorageFormatError("Failed to parse data file", path) from exc


def read_array(path: Path | str, *, missing_ok: bool = False) -> list:
    """Parse a JSON array; a missing file reads as [] when missing_ok."""
    data = read_document(path, default=[]) if missing_ok else read_document(path)
    if not isinstance(data, list):
        raise StorageFormatError("Expected a JSON array", path)
    return data


def write_document(path: Path | str, data: Any) -> None:
    """Serialize data and atomically replace the file at path."""
    path = Path(path)
    try:
        payload = json.dumps(data, ensure_ascii=False, indent=2)
    except (TypeError, ValueError) as exc:
        raise StorageWriteError("Failed to serialize data", path) from exc
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise StorageWriteError("Failed to write data file", path) from exc
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
