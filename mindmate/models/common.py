# shared field types for resource schemas
# timestamps are utc at millisecond precision (what mongodb stores), short text mirrors a 255-char column

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, StringConstraints


def _to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def as_utc(value: datetime) -> datetime:
    """treat naive datetimes as utc, convert aware ones to utc"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return _to_millis(value.astimezone(timezone.utc))


def utcnow() -> datetime:
    return _to_millis(datetime.now(timezone.utc))


UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]
ShortText = Annotated[str, StringConstraints(max_length=255)]
