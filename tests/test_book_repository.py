"""
Behaviour of the file-backed book catalog (lookup, filtering, upsert, locking).
"""
from __future__ import annotations

import json
import threading

import pytest

from bookshelf.domain.books import Book
from bookshelf.repositories import json_storage
from bookshelf.repositories.book_repository import BookRepository
from bookshelf.repositories.json_storage import StorageFormatError, StorageReadError, StorageWriteError


def _book(book_id: int, title: str = "Title", tags=None) -> dict:
    return {"id": book_id, "title": title, "content": f"content {book_id}", "tags": list(tags or [])}


@pytest.fixture()
def repo(write_catalog):
    path = write_catalog(
        [
            _book(1, "Rust Basics", ["rust", "async"]),
            _book(2, "Async in Rust", ["rust", "parallel"]),
            _book(3, "Python Tricks", ["python"]),
        ]
    )
    return BookRepository(path)


def test_list_books_preserves_file_order(repo):
    assert [b.id for b in repo.list_books()] == [1, 2, 3]
    assert repo.list_books()[0] == Book(1, "Rust Basics", "content 1", ["rust", "async"])


def test_list_books_missing_file(tmp_path):
    with pytest.raises(StorageReadError):
        BookRepository(tmp_path / "missing.json").list_books()


def test_list_books_rejects_bad_records(write_catalog):
    path = write_catalog([{"id": -1, "title": "x", "content": "y"}])
    with pytest.raises(StorageFormatError):
        BookRepository(path).list_books()


def test_record_without_tags_reads_as_empty(write_catalog):
    path = write_catalog([{"id": 7, "title": "Old", "content": "legacy"}])
    assert BookRepository(path).list_books() == [Book(7, "Old", "legacy", [])]


def test_find_by_id(repo):
    found = repo.find_by_id(2)
    assert found is not None
    assert found.title == "Async in Rust"
    assert repo.find_by_id(999) is None


def test_find_by_id_surfaces_format_errors(write_catalog):
    path = write_catalog({"not": "a list"})
    with pytest.raises(StorageFormatError):
        BookRepository(path).find_by_id(1)


def test_filter_by_tag(repo):
    assert [b.id for b in repo.filter_books(tag="rust")] == [1, 2]
    assert [b.id for b in repo.filter_books(tag="parallel")] == [2]
    assert repo.filter_books(tag="cooking") == []


def test_filter_by_id_and_combined(repo):
    assert [b.id for b in repo.filter_books(book_id=3)] == [3]
    assert repo.filter_books(book_id=42) == []
    assert [b.id for b in repo.filter_books(book_id=1, tag="rust")] == [1]
    assert repo.filter_books(book_id=3, tag="rust") == []


def test_filter_without_predicates_returns_everything(repo):
    assert repo.filter_books() == repo.list_books()


def test_upsert_updates_in_place(repo):
    updated = Book(1, "Rust Basics v2", "new content", ["rust"])
    books = repo.upsert_book(updated)

    assert [b.id for b in books] == [1, 2, 3]
    assert books[0] == updated
    matches = [b for b in repo.list_books() if b.id == 1]
    assert len(matches) == 1
    assert matches[0].title == "Rust Basics v2"


def test_upsert_middle_record_keeps_position(repo):
    repo.upsert_book(Book(2, "Async in Rust, 2nd ed.", "more", ["rust"]))
    assert [b.id for b in repo.list_books()] == [1, 2, 3]
    assert repo.find_by_id(2).title == "Async in Rust, 2nd ed."


def test_upsert_appends_new_record(repo):
    books = repo.upsert_book(Book(10, "New", "fresh", []))
    assert [b.id for b in books] == [1, 2, 3, 10]
    on_disk = json.loads(repo.path.read_text(encoding="utf-8"))
    assert on_disk[-1] == {"id": 10, "title": "New", "content": "fresh", "tags": []}


def test_upsert_is_idempotent(repo):
    book = Book(5, "Same", "same", ["x"])
    once = repo.upsert_book(book)
    twice = repo.upsert_book(book)
    assert once == twice


def test_ids_stay_unique_across_upserts(repo):
    for book_id in [1, 4, 1, 4, 2, 5, 5]:
        repo.upsert_book(Book(book_id, f"t{book_id}", "c", []))
    ids = [b.id for b in repo.list_books()]
    assert len(ids) == len(set(ids))
    assert ids == [1, 2, 3, 4, 5]


def test_upsert_on_missing_catalog_fails(tmp_path):
    repo = BookRepository(tmp_path / "missing.json")
    with pytest.raises(StorageReadError):
        repo.upsert_book(Book(1, "t", "c", []))
    assert not (tmp_path / "missing.json").exists()


def test_upsert_write_failure_is_reported(repo, monkeypatch):
    before = repo.path.read_text(encoding="utf-8")

    def boom(src, dst):
        raise OSError("read-only filesystem")

    monkeypatch.setattr(json_storage.os, "replace", boom)
    with pytest.raises(StorageWriteError):
        repo.upsert_book(Book(99, "lost", "lost", []))
    monkeypatch.undo()

    assert repo.path.read_text(encoding="utf-8") == before
    assert repo.find_by_id(99) is None


def test_lock_released_after_error(tmp_path, write_catalog):
    repo = BookRepository(tmp_path / "missing.json")
    with pytest.raises(StorageReadError):
        repo.list_books()
    assert not repo._lock.locked()
    write_catalog([_book(1)], name="missing.json")
    assert [b.id for b in repo.list_books()] == [1]


def test_concurrent_upserts_lose_nothing(write_catalog):
    repo = BookRepository(write_catalog([]))
    errors = []

    def worker(start: int) -> None:
        try:
            for offset in range(5):
                repo.upsert_book(Book(start + offset, "t", "c", []))
        except Exception as exc:  # pragma: no cover - surfaced by the assertion below
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(i * 100,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    ids = sorted(b.id for b in repo.list_books())
    assert ids == sorted(i * 100 + o for i in range(8) for o in range(5))


def test_book_is_hashable_and_immutable():
    book = Book(1, "t", "c", ["x"])
    assert book.tags == ("x",)
    assert hash(book) == hash(Book(1, "t", "c", ("x",)))
    with pytest.raises(AttributeError):
        book.tags.append("y")


@pytest.mark.parametrize(
    "record",
    [
        {"id": True, "title": "t", "content": "c"},
        {"id": "1", "title": "t", "content": "c"},
        {"id": 2**32, "title": "t", "content": "c"},
        {"id": 1, "title": "t", "content": "c", "tags": "rust"},
        {"id": 1, "title": None, "content": "c"},
    ],
)
def test_invalid_stored_records_are_format_errors(write_catalog, record):
    with pytest.raises(StorageFormatError):
        BookRepository(write_catalog([record])).list_books()
