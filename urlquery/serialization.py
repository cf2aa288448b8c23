"""ISO-8601 helpers used by the date converter."""

from datetime import date, datetime, timezone
from typing import Union


def serialize_iso_datetime(value: Union[datetime, date]) -> str:
    """Serialize a date or datetime to ISO-8601 text.

    Timezone-aware datetimes are normalized to UTC and written with a ``Z``
    suffix. Naive datetimes and plain dates are written as they are.

    Args:
        value: Value to serialize

    Returns:
        ISO-8601 string

    Raises:
        TypeError: If ``value`` is not a date or datetime
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            utc = value.astimezone(timezone.utc).replace(tzinfo=None)
            return f"{utc.isoformat()}Z"
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Cannot serialize {type(value).__name__} as an ISO-8601 date")


def deserialize_iso_datetime(value: str) -> Union[datetime, date]:
    """Parse ISO-8601 text, accepting a trailing ``Z`` for UTC.

    A bare calendar date (``2024-05-01``) comes back as a ``date``.

    Args:
        value: ISO-8601 string

    Returns:
        Parsed datetime (aware when the text carries an offset) or date

    Raises:
        ValueError: If the text is not valid ISO-8601
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    if len(text) == 10 and "T" not in text:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text)


__all__ = ["serialize_iso_datetime", "deserialize_iso_datetime"]
