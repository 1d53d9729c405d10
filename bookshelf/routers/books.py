from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Path, Query, Request
from fastapi.responses import PlainTextResponse

from bookshelf.domain.books import MAX_BOOK_ID, BookPayload
from bookshelf.repositories.book_repository import BookRepository

router = APIRouter(prefix="/books", tags=["books"])


def _get_repository(request: Request) -> BookRepository:
    repo = getattr(getattr(request.app, "state", None), "book_repository", None)
    if not repo:
        raise RuntimeError("BookRepository not configured")
    return repo


@router.get("")
def list_books(
    request: Request,
    book_id: Optional[int] = Query(None, alias="id", ge=0, le=MAX_BOOK_ID),
    tag: Optional[str] = Query(None),
):
    repo = _get_repository(request)
    if book_id is None and tag is None:
        books = repo.list_books()
    else:
        books = repo.filter_books(book_id=book_id, tag=tag)
    return [book.to_dict() for book in books]


@router.get("/id/{book_id}")
def get_book_by_id(request: Request, book_id: int = Path(..., ge=0, le=MAX_BOOK_ID)):
    book = _get_repository(request).find_by_id(book_id)
    if book is None:
        return PlainTextResponse("Book not found", status_code=404)
    return book.to_dict()


@router.put("")
def upsert_book(request: Request, payload: BookPayload):
    books = _get_repository(request).upsert_book(payload.to_book())
    return [item.to_dict() for item in books]
