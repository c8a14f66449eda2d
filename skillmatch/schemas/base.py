"""
Base schema classes with custom serialization.

Dates cross the API as plain calendar dates (YYYY-MM-DD): no time of day,
no timezone. Timestamps are rendered in UTC ISO format with a Z suffix.
"""

from datetime import date, datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer


def serialize_datetime_utc(dt: datetime | None) -> str | None:
    """
    Serialize datetime as ISO 8601 UTC with millisecond precision.

    Naive values are stored in UTC, so they are only suffixed.
    Example: 2025-12-08 09:01:16.715123 -> "2025-12-08T09:01:16.715Z"
    """
    if dt is None:
        return None

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)

    formatted = dt.strftime("%Y-%m-%dT%H:%M:%S")
    ms = dt.microsecond // 1000
    return f"{formatted}.{ms:03d}Z"


def serialize_date_simple(d: date | None) -> str | None:
    """Serialize date as simple ISO date string (YYYY-MM-DD)."""
    if d is None:
        return None
    return d.isoformat()


# Annotated types for Pydantic v2 serialization
DateTimeUTC = Annotated[datetime, PlainSerializer(serialize_datetime_utc, return_type=str)]
DateSimple = Annotated[date, PlainSerializer(serialize_date_simple, return_type=str)]


class BaseSchema(BaseModel):
    """
    Base schema class with standard configuration.
    Use DateTimeUTC or DateSimple types for fields.
    """

    model_config = ConfigDict(
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    message: str
