"""
Shared column defaults for the store models.
"""

import datetime
import uuid


def new_id() -> str:
    """Return a fresh stable identifier."""
    return str(uuid.uuid4())


def utcnow() -> datetime.datetime:
    """Naive UTC timestamp (SQLite drops tzinfo on round-trip)."""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)
