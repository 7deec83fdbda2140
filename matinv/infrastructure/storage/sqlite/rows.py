"""Helpers shared by the SQLite stores for IDs and stored timestamps."""

import uuid
from datetime import UTC, datetime


def generate_id() -> str:
    """Generate a new UUID text ID."""
    return str(uuid.uuid4())


def parse_datetime(value: str | None) -> datetime | None:
    """Parse a stored ISO timestamp, assuming UTC when no offset is stored."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_datetime(value: datetime | None) -> str | None:
    """Format a timestamp for storage."""
    return value.isoformat() if value else None
