"""Process-wide logging setup."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "info") -> None:
    """Install one stream handler on the root logger; calling again only updates the level."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or "info").upper(), logging.INFO))
    if any(getattr(h, "_bookshelf", False) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._bookshelf = True  # type: ignore[attr-defined]
    root.addHandler(handler)
