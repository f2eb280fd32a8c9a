"""Minute-granularity keys for the notification store."""

from __future__ import annotations

from datetime import datetime, timezone


def _minute_key(timestamp: datetime) -> tuple[int, int, int, int, int]:
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return (timestamp.year, timestamp.month, timestamp.day, timestamp.hour, timestamp.minute)


class TimeBucket:
    """Wrap a timestamp so that equality ignores seconds.

    Two buckets compare equal iff their timestamps share year, month, day,
    hour and minute. The wrapped value keeps its seconds for display.
    """

    __slots__ = ("timestamp", "_key")

    def __init__(self, timestamp: datetime) -> None:
        self.timestamp = timestamp
        self._key = _minute_key(timestamp)

    @classmethod
    def from_timestamp(cls, timestamp: datetime) -> TimeBucket:
        return cls(timestamp)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeBucket):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __lt__(self, other: TimeBucket) -> bool:
        return self._key < other._key

    def __repr__(self) -> str:
        return f"TimeBucket({self.timestamp.isoformat()})"

    def __str__(self) -> str:
        return self.timestamp.strftime("%Y-%m-%d %H:%M")
