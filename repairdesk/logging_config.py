"""Logging setup shared by the API server and the CLI."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Attach a stdout handler to the root logger at ``level``."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Idempotent: uvicorn reload and repeated CLI calls must not stack handlers.
    if any(getattr(h, "_repairdesk", False) for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._repairdesk = True
    root.addHandler(handler)

    # httpx logs every request at INFO; keep it quieter than our own logs.
    logging.getLogger("httpx").setLevel(logging.WARNING)
