from datetime import datetime, timezone
from zoneinfo import ZoneInfo
from typing import Optional

DEFAULT_TIMEZONE = "UTC"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_local(dt: datetime, tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Converte datetime para o timezone informado (naive = UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(ZoneInfo(tz_name))


def day_key(dt: Optional[datetime] = None, tz_name: str = DEFAULT_TIMEZONE) -> str:
    """Calendar date (YYYY-MM-DD) used to bucket the daily request quota."""
    return to_local(dt or utc_now(), tz_name).strftime("%Y-%m-%d")
