"""
Core utilities shared across the Bookshelf API.

This package hosts:
- configuration helpers (env vars, file paths, CORS origins)
- password hashing
- logging setup and the per-IP rate limiter
"""
