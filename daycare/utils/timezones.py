# daycare/utils/timezones.py
from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from daycare.core.config import settings

CENTER_TZ = ZoneInfo(settings.center_timezone)
UTC = ZoneInfo("UTC")


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def center_today(now: Optional[datetime] = None) -> date:
    """Calendar date at the center. Attendance rows are bucketed by this date."""
    if now is None:
        return datetime.now(CENTER_TZ).date()
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now.astimezone(CENTER_TZ).date()
