"""Bookshelf API: a book catalog and credential store persisted as JSON files."""

__version__ = "0.1.0"
