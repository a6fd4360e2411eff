from datetime import datetime, timezone
from typing import Optional


def isoformat(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 in UTC; naive values from the store are already UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()
