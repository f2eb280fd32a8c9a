"""In-memory schedule of pending notifications."""

from __future__ import annotations

from typing import Iterator, Optional

from reminder_engine.bucket import TimeBucket
from reminder_engine.errors import AlreadyScheduled, NotFound
from reminder_engine.schema import Notification


class NotificationStore:
    """Map each minute bucket to at most one notification.

    Not thread-safe on its own; the owning Scheduler serialises access.
    """

    def __init__(self) -> None:
        self._entries: dict[TimeBucket, Notification] = {}

    def get(self, bucket: TimeBucket) -> Optional[Notification]:
        return self._entries.get(bucket)

    def insert(self, notification: Notification) -> None:
        bucket = notification.bucket
        existing = self._entries.get(bucket)
        if existing is not None:
            raise AlreadyScheduled(bucket, existing)
        self._entries[bucket] = notification

    def remove(self, bucket: TimeBucket) -> Notification:
        try:
            return self._entries.pop(bucket)
        except KeyError:
            raise NotFound(bucket) from None

    def snapshot(self) -> list[Notification]:
        return sorted(self._entries.values(), key=lambda n: n.bucket)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, bucket: object) -> bool:
        return bucket in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Notification]:
        return iter(self.snapshot())
