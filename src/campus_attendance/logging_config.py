from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Install one stream handler on the package logger (idempotent)."""

    root = logging.getLogger("campus_attendance")
    root.setLevel(level if isinstance(level, int) else str(level).upper())
    if not any(getattr(h, "_campus_attendance", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._campus_attendance = True  # type: ignore[attr-defined]
        root.addHandler(handler)
