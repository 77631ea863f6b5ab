"""Shared logging utilities for the vehicle ownership backend."""

from __future__ import annotations

import logging
import os
from pathlib import Path

__all__ = ["logger", "reconciliation_logger", "RECONCILIATION_LOG_PATH"]

# Use the uvicorn error logger so messages integrate with the application logs.
logger = logging.getLogger("uvicorn.error")

_log_path_env = os.getenv("RECONCILIATION_LOG_PATH", "").strip()
RECONCILIATION_LOG_PATH: Path | None = Path(_log_path_env).expanduser() if _log_path_env else None

_reconciliation_file_handler: logging.FileHandler | None = None


def _configure_reconciliation_logger() -> logging.Logger:
    """Verdict audit trail: console always, file only when RECONCILIATION_LOG_PATH is set."""
    global _reconciliation_file_handler

    audit_logger = logging.getLogger("vehicle_ownership.reconciliation")
    audit_logger.setLevel(logging.INFO)
    audit_logger.propagate = False

    if not any(getattr(handler, "reconciliation_console", False) for handler in audit_logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        console_handler.reconciliation_console = True  # type: ignore[attr-defined]
        audit_logger.addHandler(console_handler)

    if RECONCILIATION_LOG_PATH is not None and (
        _reconciliation_file_handler is None
        or getattr(_reconciliation_file_handler, "baseFilename", None) != str(RECONCILIATION_LOG_PATH)
    ):
        RECONCILIATION_LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(RECONCILIATION_LOG_PATH, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        handler.setLevel(logging.DEBUG)
        audit_logger.addHandler(handler)
        _reconciliation_file_handler = handler

    return audit_logger


reconciliation_logger = _configure_reconciliation_logger()