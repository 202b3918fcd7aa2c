from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp; SQLite columns store datetimes without tzinfo."""
    return datetime.now(UTC).replace(tzinfo=None)
