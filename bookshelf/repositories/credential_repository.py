"""Credential set backed by a single JSON file."""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import ValidationError

from bookshelf.core.security import HashDerivationError, hash_password
from bookshelf.domain.credentials import CREDENTIAL_LIST, Credential
from bookshelf.repositories.json_storage import StorageFormatError, read_array, write_document

logger = logging.getLogger(__name__)


class CredentialRepository:
    """Append-only store of hashed credentials; raw passwords never reach disk."""

    def __init__(self, path: Path | str, hasher: Optional[Callable[[str], str]] = None) -> None:
        self.path = Path(path)
        self._hasher = hasher or hash_password
        self._lock = threading.Lock()

    def _load(self) -> List[Credential]:
        # A fresh system has no credential file yet.
        records = read_array(self.path, missing_ok=True)
        try:
            return CREDENTIAL_LIST.validate_python(records)
        except ValidationError as exc:
            raise StorageFormatError(f"Invalid credential record ({exc.error_count()} errors)", self.path) from exc

    def load_all(self) -> List[Credential]:
        with self._lock:
            return self._load()

    def register(self, username: str, raw_password: str) -> Credential:
        """Hash raw_password with a fresh salt and append the record. Duplicates are allowed."""
        password_hash = self._hasher(raw_password)
        if not password_hash or password_hash == raw_password:
            raise HashDerivationError("Password hasher returned an unusable hash")
        credential = Credential(username=username, password_hash=password_hash)
        with self._lock:
            credentials = self._load()
            credentials.append(credential)
            write_document(self.path, [c.to_dict() for c in credentials])
        logger.info("Registered credential for %s (%d records)", username, len(credentials))
        return credential
