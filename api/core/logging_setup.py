"""
Process-wide logging configuration.
"""

from __future__ import annotations

import logging

from . import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    root = logging.getLogger()
    level_name = (level or settings.log_level()).upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    # Idempotent across reloads; uvicorn may already have installed handlers.
    if any(getattr(h, "_storefront", False) for h in root.handlers):
        return None

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._storefront = True  # type: ignore[attr-defined]
    root.addHandler(handler)
