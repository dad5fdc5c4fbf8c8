"""Column defaults shared by all models."""

import uuid
from datetime import datetime, timezone


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # SQLite CURRENT_TIMESTAMP has whole seconds only; ordering needs microseconds.
    return datetime.now(timezone.utc)
