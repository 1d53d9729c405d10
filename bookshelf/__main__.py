"""Run the API with uvicorn: python -m bookshelf"""
from __future__ import annotations

import uvicorn

from bookshelf.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "bookshelf.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
