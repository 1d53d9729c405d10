"""
Persistence adapters.

These modules encapsulate how records are stored/retrieved (one JSON file per
collection). Routers and services depend on the repositories instead of
touching the files directly.
"""
from bookshelf.repositories.book_repository import BookRepository
from bookshelf.repositories.credential_repository import CredentialRepository
from bookshelf.repositories.json_storage import (
    StorageError,
    StorageFormatError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    "BookRepository",
    "CredentialRepository",
    "StorageError",
    "StorageFormatError",
    "StorageReadError",
    "StorageWriteError",
]
