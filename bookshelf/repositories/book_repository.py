"""Book catalog backed by a single JSON file."""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from bookshelf.domain.books import BOOK_LIST, Book
from bookshelf.repositories.json_storage import StorageFormatError, read_array, write_document

logger = logging.getLogger(__name__)


class BookRepository:
    """
    Read, query and upsert access to the book catalog.

    Every operation re-reads the file and runs under one lock, so a
    read-modify-write never interleaves with another operation on the same
    repository instance.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    # -------------------------- helpers --------------------------
    def _load(self) -> List[Book]:
        records = read_array(self.path)
        try:
            return [payload.to_book() for payload in BOOK_LIST.validate_python(records)]
        except ValidationError as exc:
            raise StorageFormatError(f"Invalid book record ({exc.error_count()} errors)", self.path) from exc

    def _save(self, books: List[Book]) -> None:
        write_document(self.path, [book.to_dict() for book in books])

    # -------------------------- queries --------------------------
    def list_books(self) -> List[Book]:
        with self._lock:
            return self._load()

    def find_by_id(self, book_id: int) -> Optional[Book]:
        with self._lock:
            books = self._load()
        return next((book for book in books if book.id == book_id), None)

    def filter_books(self, book_id: Optional[int] = None, tag: Optional[str] = None) -> List[Book]:
        with self._lock:
            books = self._load()
        return [
            book
            for book in books
            if (book_id is None or book.id == book_id) and (tag is None or book.has_tag(tag))
        ]

    # -------------------------- mutations --------------------------
    def upsert_book(self, book: Book) -> List[Book]:
        """Replace the record with the same id in place, or append it; returns the catalog."""
        with self._lock:
            books = self._load()
            for idx, existing in enumerate(books):
                if existing.id == book.id:
                    books[idx] = book
                    action = "updated"
                    break
            else:
                books.append(book)
                action = "inserted"
            self._save(books)
        logger.info("Book %s %s (%d records)", book.id, action, len(books))
        return books
