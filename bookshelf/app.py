from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from bookshelf.core.config import Settings, get_settings
from bookshelf.core.log_config import configure_logging
from bookshelf.core.security import HashDerivationError
from bookshelf.repositories.book_repository import BookRepository
from bookshelf.repositories.credential_repository import CredentialRepository
from bookshelf.repositories.json_storage import (
    StorageError,
    StorageFormatError,
    StorageReadError,
    StorageWriteError,
)
from bookshelf.routers import auth as auth_router
from bookshelf.routers import books as books_router
from bookshelf.services.auth_service import AuthService

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("bookshelf.access")

_STORAGE_ERROR_BODIES = {
    StorageReadError: "Failed to read JSON",
    StorageFormatError: "Failed to parse JSON",
    StorageWriteError: "Failed to write JSON",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, no sniffing, referrer policy)."""

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        return response


class CorsViolationLogMiddleware(BaseHTTPMiddleware):
    """Log requests whose Origin is not on the allow-list; CORSMiddleware does the enforcing."""

    def __init__(self, app, *, allowed_origins: tuple[str, ...]) -> None:
        super().__init__(app)
        self._allowed = set(allowed_origins)

    async def dispatch(self, request, call_next):
        origin = request.headers.get("origin")
        if origin and origin.rstrip("/") not in self._allowed:
            logger.error("CORS violation: Origin %r is not allowed", origin)
        return await call_next(request)


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        client = request.client.host if request.client else "-"
        access_logger.info(
            '%s "%s %s" %s %.1fms',
            client,
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


async def _storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    body = _STORAGE_ERROR_BODIES.get(type(exc), "Storage failure")
    return PlainTextResponse(body, status_code=500)


async def _hash_error_handler(request: Request, exc: HashDerivationError):
    logger.error("Password hashing failed on %s: %s", request.url.path, exc)
    return PlainTextResponse("Failed to hash password", status_code=500)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with its repositories bound to the configured files."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Bookshelf API")
    app.state.settings = settings
    app.state.book_repository = BookRepository(settings.books_file)
    app.state.credential_repository = CredentialRepository(settings.credentials_file)
    app.state.auth_service = AuthService(app.state.credential_repository)

    app.add_middleware(SecurityHeadersMiddleware)
    if settings.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.allowed_origins),
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(CorsViolationLogMiddleware, allowed_origins=settings.allowed_origins)
    app.add_middleware(AccessLogMiddleware)

    app.add_exception_handler(StorageError, _storage_error_handler)
    app.add_exception_handler(HashDerivationError, _hash_error_handler)

    @app.get("/", response_class=PlainTextResponse)
    def hello():
        return "Hello world!"

    app.include_router(books_router.router)
    app.include_router(auth_router.router)

    logger.info(
        "Bookshelf API configured (books=%s, credentials=%s, env=%s)",
        settings.books_file,
        settings.credentials_file,
        settings.app_env,
    )
    return app
