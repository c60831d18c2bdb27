from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Current UTC time as a naive datetime (MySQL DATETIME has no zone).

    Note: Wrapped so tests can patch it.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
