"""
Timestamp helpers.

All timestamps handled by the package are timezone aware UTC datetimes.
Naive datetimes coming from callers are interpreted as UTC.
"""

from datetime import datetime, timezone
from typing import Optional, Union

from dateutil import parser as date_parser


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO-8601 string (or pass through a datetime) into aware UTC."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    text = str(value).strip()
    if not text:
        return None
    return ensure_utc(date_parser.isoparse(text))


def to_storage(value: datetime) -> str:
    """
    Format a datetime for storage.

    The format has a fixed width (always with microseconds, always UTC) so
    that string comparison in SQL matches chronological order.
    """
    return ensure_utc(value).strftime('%Y-%m-%dT%H:%M:%S.%f+00:00')
