#!/usr/bin/env python3
"""
Insert or update a book directly in the catalog file.

Usage:
  python scripts/add_book.py --id 3 --title "Rust Patterns" [--content "..."] [--tag rust --tag patterns] [--file data/books.json]
"""
from __future__ import annotations

import argparse
import sys

from pydantic import ValidationError

from bookshelf.core.config import get_settings
from bookshelf.domain.books import BookPayload
from bookshelf.repositories.book_repository import BookRepository


def main() -> None:
    ap = argparse.ArgumentParser(description="Insert or update a book in the catalog file")
    ap.add_argument("--id", required=True, type=int, help="Book id (unsigned 32-bit)")
    ap.add_argument("--title", required=True, help="Book title")
    ap.add_argument("--content", default="", help="Book content")
    ap.add_argument("--tag", action="append", default=[], help="Tag (repeatable)")
    ap.add_argument("--file", help="Catalog path (default: BOOKS_FILE or data/books.json)")
    args = ap.parse_args()

    title = (args.title or "").strip()
    if not title:
        raise SystemExit("Title must not be empty")
    try:
        payload = BookPayload(id=args.id, title=title, content=args.content, tags=list(args.tag))
    except ValidationError as exc:
        raise SystemExit(f"Invalid book: {exc}")

    repo = BookRepository(args.file or get_settings().books_file)
    books = repo.upsert_book(payload.to_book())
    print("OK: book saved")
    print(f"  ID: {payload.id}")
    print(f"  Title: {title}")
    print(f"  Catalog size: {len(books)}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
