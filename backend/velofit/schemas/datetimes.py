# backend/velofit/schemas/datetimes.py

from datetime import datetime
from typing import Optional


def local_naive(value: Optional[datetime]) -> Optional[datetime]:
    # Single-timezone system: aware datetimes are converted to local wall time
    if value is not None and value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value
