"""Notification scheduling engine."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from reminder_engine.bucket import TimeBucket
from reminder_engine.console import ConsolePresenter
from reminder_engine.errors import AlreadyScheduled, NotFound
from reminder_engine.ports import Presenter
from reminder_engine.schema import Notification, Reminder, Task
from reminder_engine.store import NotificationStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class Scheduler:
    """Own a NotificationStore and serialise every read and write to it.

    push/pop raise AlreadyScheduled/NotFound; the reminder and task helpers
    recover per notification, report on the console and return what failed.
    """

    def __init__(
        self,
        store: Optional[NotificationStore] = None,
        clock: Optional[Clock] = None,
        console: Optional[Presenter] = None,
    ) -> None:
        self.store = store if store is not None else NotificationStore()
        self.clock = clock or datetime.now
        self.console = console or ConsolePresenter()
        self._lock = threading.RLock()

    # ---- Primitive operations ----

    def push(self, notification: Notification) -> bool:
        """Insert a future notification; past or present fire times are ignored."""

        with self._lock:
            bucket = notification.bucket
            existing = self.store.get(bucket)
            if existing is not None:
                raise AlreadyScheduled(bucket, existing)
            if notification.fire_time <= self.clock():
                logger.debug("Skipping notification at %s: fire time already passed", bucket)
                return False
            self.store.insert(notification)
            logger.debug("Scheduled %s notification %s at %s", notification.kind.value, notification.subject_id, bucket)
            return True

    def pop(self, notification: Notification) -> Notification:
        with self._lock:
            removed = self.store.remove(notification.bucket)
            logger.debug("Removed notification at %s", notification.bucket)
            return removed

    def requeue(self, notification: Notification, new_fire_time: datetime) -> Notification:
        """Move a notification to the bucket of ``new_fire_time``."""

        moved = notification.rescheduled(new_fire_time)
        with self._lock:
            existing = self.store.get(moved.bucket)
            if existing is not None and moved.bucket != notification.bucket:
                raise AlreadyScheduled(moved.bucket, existing)
            if notification.bucket in self.store:
                self.store.remove(notification.bucket)
            self.store.insert(moved)
        logger.info("Requeued %s notification %s at %s", moved.kind.value, moved.subject_id, moved.bucket)
        return moved

    def discard(self, notification: Notification) -> bool:
        """Remove the notification if its bucket is still occupied."""

        with self._lock:
            if notification.bucket not in self.store:
                return False
            self.store.remove(notification.bucket)
            return True

    def due(self, now: Optional[datetime] = None) -> Optional[Notification]:
        with self._lock:
            return self.store.get(TimeBucket.from_timestamp(now or self.clock()))

    def pending(self) -> list[Notification]:
        with self._lock:
            return self.store.snapshot()

    # ---- Entity helpers ----

    def push_reminder(self, reminder: Reminder) -> list[AlreadyScheduled]:
        """Schedule the event time and every ring offset of a reminder."""

        if reminder.id is None:
            self.console.print_error("Reminder has no id; notifications not scheduled")
            return []

        failures: list[AlreadyScheduled] = []
        for fire_time in reminder.ring_times():
            notification = Notification.for_reminder(reminder, fire_time)
            try:
                self.push(notification)
            except AlreadyScheduled as exc:
                logger.error("Reminder %s: %s", reminder.id, exc)
                self.console.print_error(exc)
                failures.append(exc)
        return failures

    def pop_reminder(self, reminder: Reminder) -> list[NotFound]:
        missing: list[NotFound] = []
        for fire_time in reminder.ring_times():
            notification = Notification.for_reminder(reminder, fire_time)
            try:
                self.pop(notification)
            except NotFound as exc:
                logger.warning("Reminder %s: notification at %s wasn't scheduled", reminder.id, exc.bucket)
                missing.append(exc)
        return missing

    def push_task(self, task: Task) -> list[AlreadyScheduled]:
        if task.id is None:
            self.console.print_error("Task has no id; notification not scheduled")
            return []
        try:
            self.push(Notification.for_task(task))
        except AlreadyScheduled as exc:
            logger.error("Task %s: %s", task.id, exc)
            self.console.print_error(exc)
            return [exc]
        return []

    def pop_task(self, task: Task) -> list[NotFound]:
        try:
            self.pop(Notification.for_task(task))
        except NotFound as exc:
            logger.warning("Task %s: notification at %s wasn't scheduled", task.id, exc.bucket)
            return [exc]
        return []
