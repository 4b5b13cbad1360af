# backend/fishkeeper/util/time.py
from datetime import datetime, timezone


def utcnow() -> datetime:
    # SQLite の DateTime は tz を保持しないため naive UTC に揃える
    return datetime.now(timezone.utc).replace(tzinfo=None)
