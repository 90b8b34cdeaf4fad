# shared/identity.py
from datetime import datetime, timezone


def utc_timestamp() -> str:
    """ISO-8601 UTC instant, e.g. 2024-05-01T12:00:00.123456Z."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")
