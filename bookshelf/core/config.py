"""
Configuration helpers for the Bookshelf backend.

Settings are read once from environment variables (file paths, CORS origins,
bind address, log level) so that routers/repositories never touch os.environ.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_ALLOWED_ORIGINS = ("http://localhost:3000", "http://localhost:5173")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    books_file: str
    credentials_file: str
    allowed_origins: tuple[str, ...]
    host: str
    port: int
    log_level: str
    register_rate_limit: int
    register_rate_window: int
    trust_proxy_headers: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _origins(value: str | None) -> tuple[str, ...]:
        if value is None:
            return DEFAULT_ALLOWED_ORIGINS
        return tuple(origin.strip().rstrip("/") for origin in value.split(",") if origin.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        books_file=os.getenv("BOOKS_FILE", os.path.join("data", "books.json")),
        credentials_file=os.getenv("CREDENTIALS_FILE", os.path.join("data", "credentials.json")),
        allowed_origins=_origins(os.getenv("ALLOWED_ORIGINS")),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "8080"), 8080),
        log_level=(os.getenv("LOG_LEVEL") or "info").lower(),
        register_rate_limit=_int(os.getenv("REGISTER_RATE_LIMIT", "10"), 10),
        register_rate_window=_int(os.getenv("REGISTER_RATE_WINDOW", "60"), 60),
        trust_proxy_headers=_bool(os.getenv("TRUST_PROXY_HEADERS"), False),
    )
