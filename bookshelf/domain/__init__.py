"""Record types (books, credentials) and their validation schemas."""
from bookshelf.domain.books import BOOK_LIST, MAX_BOOK_ID, Book, BookPayload
from bookshelf.domain.credentials import CREDENTIAL_LIST, Credential

__all__ = ["BOOK_LIST", "CREDENTIAL_LIST", "MAX_BOOK_ID", "Book", "BookPayload", "Credential"]
