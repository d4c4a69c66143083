import uuid
from datetime import datetime, timezone


def new_id() -> str:
    """Opaque record identifier."""
    return uuid.uuid4().hex


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2025-01-10T09:30:00.123Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
