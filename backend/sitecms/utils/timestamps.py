from datetime import datetime, timezone
from typing import Optional


def normalize_ts(ts: datetime) -> datetime:
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive (SQLite drops tzinfo on the way back).
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def isoformat_or_none(ts: Optional[datetime]) -> Optional[str]:
    if ts is None:
        return None
    return normalize_ts(ts).isoformat()
