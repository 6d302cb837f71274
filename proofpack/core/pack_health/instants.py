"""Instant normalisation for document timestamps.

Document stores hand us timestamps in several shapes (Firestore-style epoch
milliseconds, ISO strings, datetimes). Everything is normalised to an aware
UTC ``datetime`` at the model boundary so the scorers only ever compare
like with like.
"""

from datetime import UTC, date, datetime, time, timedelta
from typing import Any

ONE_DAY = timedelta(days=1)


def utc_now() -> datetime:
    """Current instant in UTC."""
    return datetime.now(UTC)


def to_instant(value: Any) -> datetime:
    """
    Normalise a timestamp-like value to an aware UTC datetime.

    Accepts aware or naive datetimes (naive is read as UTC), dates (midnight
    UTC), ISO-8601 strings and epoch milliseconds.

    Raises:
        ValueError: If the value cannot be compared as an instant
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)

    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise ValueError(f"Unparseable timestamp: {value!r}") from e
        return to_instant(parsed)

    # bool is an int subclass but never a timestamp
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"Epoch milliseconds out of range: {value!r}") from e

    raise ValueError(f"Unsupported timestamp type: {type(value).__name__}")


def days_until(instant: datetime, now: datetime) -> float:
    """Fractional days from ``now`` until ``instant`` (negative if past)."""
    return (instant - now) / ONE_DAY
