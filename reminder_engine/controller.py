"""Reminder and task controllers that keep storage and schedule in step."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from reminder_engine.adapters.memory_store import InMemoryRepository
from reminder_engine.config import Settings, get_settings
from reminder_engine.errors import InvalidEventTime
from reminder_engine.scheduler import Scheduler
from reminder_engine.schema import TASK_TITLE, Reminder, RepeatPattern, Task

logger = logging.getLogger(__name__)


def _check_event_time(reminder: Reminder) -> None:
    if reminder.event_time < reminder.added_time:
        raise InvalidEventTime(f"Event time {reminder.event_time} is before added time {reminder.added_time}")


def _fresh_stamp(now: datetime, previous: datetime) -> datetime:
    # must differ from the snapshot carried by already scheduled notifications
    if now == previous:
        return now + timedelta(microseconds=1)
    return now


class ReminderController:
    """Create, edit and delete reminders along with their notifications."""

    def __init__(
        self,
        repository: InMemoryRepository[Reminder],
        scheduler: Scheduler,
        settings: Optional[Settings] = None,
    ) -> None:
        self.repository = repository
        self.scheduler = scheduler
        self.settings = settings or get_settings()

    def build(
        self,
        added_time: Optional[datetime] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        event_time: Optional[datetime] = None,
        sound: Optional[str] = None,
        repeat_pattern: Optional[RepeatPattern] = None,
        ring_offsets: Optional[set[float]] = None,
    ) -> Reminder:
        """Fill unset fields from the settings defaults."""

        added_time = added_time or self.scheduler.clock()
        if event_time is not None and event_time < added_time:
            raise InvalidEventTime(f"Event time {event_time} is before added time {added_time}")
        return Reminder(
            title=title or f"{self.settings.reminder_title}-{added_time:%Y-%m-%d %H:%M}",
            description=description or self.settings.reminder_description,
            added_time=added_time,
            event_time=event_time or added_time + timedelta(seconds=self.settings.default_event_delay_seconds),
            sound=sound or self.settings.reminder_sound,
            repeat_pattern=RepeatPattern.parse(repeat_pattern),
            ring_offsets=set(self.settings.default_ring_offsets if ring_offsets is None else ring_offsets),
        )

    def add(self, reminder: Reminder) -> int:
        _check_event_time(reminder)
        reminder.id = self.repository.create(reminder)
        logger.info("Created reminder %s", reminder.id)
        self.scheduler.push_reminder(reminder)
        return reminder.id

    def get(self, reminder_id: int) -> Optional[Reminder]:
        return self.repository.retrieve(reminder_id)

    def _unschedule(self, reminder_id: int) -> None:
        old = self.repository.retrieve(reminder_id)
        if old is None:
            return
        missing = self.scheduler.pop_reminder(old)
        if missing and old.event_time >= self.scheduler.clock():
            self.scheduler.console.print_error(
                f"Reminder {reminder_id}: {len(missing)} upcoming notification(s) were not scheduled"
            )

    def edit(self, reminder_id: int, reminder: Reminder) -> bool:
        """Replace a stored reminder and reschedule its notifications.

        The stored replacement is stamped with a new ``added_time``, so
        notifications the old version already requeued (recurrence, snooze)
        are dropped as stale when they come due.
        """

        _check_event_time(reminder)
        old = self.repository.retrieve(reminder_id)
        self._unschedule(reminder_id)
        if old is not None:
            reminder.added_time = _fresh_stamp(self.scheduler.clock(), old.added_time)
        if not self.repository.update(reminder_id, reminder):
            self.scheduler.console.print_error(f"Updating reminder db with id:{reminder_id} unsuccessful")
            return False
        reminder.id = reminder_id
        self.scheduler.push_reminder(reminder)
        return True

    def delete(self, reminder_id: int) -> bool:
        self._unschedule(reminder_id)
        if not self.repository.delete(reminder_id):
            self.scheduler.console.print_error("Deleting Reminder from database unsuccessful")
            return False
        return True


class TaskController:
    """Create, edit and delete tasks along with their deadline notification."""

    def __init__(
        self,
        repository: InMemoryRepository[Task],
        scheduler: Scheduler,
        settings: Optional[Settings] = None,
    ) -> None:
        self.repository = repository
        self.scheduler = scheduler
        self.settings = settings or get_settings()

    def build(
        self,
        description: str,
        deadline: Optional[datetime] = None,
        sound: Optional[str] = None,
        added_time: Optional[datetime] = None,
    ) -> Task:
        added_time = added_time or self.scheduler.clock()
        return Task(
            description=description,
            added_time=added_time,
            deadline=deadline or added_time + timedelta(seconds=self.settings.default_event_delay_seconds),
            sound=sound or self.settings.task_sound,
        )

    def add(self, task: Task) -> int:
        task.id = self.repository.create(task)
        logger.info("Created task %s", task.id)
        self.scheduler.push_task(task)
        return task.id

    def get(self, task_id: int) -> Optional[Task]:
        return self.repository.retrieve(task_id)

    def edit(self, task_id: int, task: Task) -> bool:
        old = self.repository.retrieve(task_id)
        if old is None:
            self.scheduler.console.print_error("Failure in retrieving from TaskDB")
            return False
        self.scheduler.pop_task(old)
        task.added_time = _fresh_stamp(self.scheduler.clock(), old.added_time)
        if not self.repository.update(task_id, task):
            self.scheduler.console.print_error(f"Updating task db with id:{task_id} unsuccessful")
            return False
        task.id = task_id
        self.scheduler.push_task(task)
        return True

    def delete(self, task_id: int) -> bool:
        old = self.repository.retrieve(task_id)
        if old is not None:
            self.scheduler.pop_task(old)
        if not self.repository.delete(task_id):
            self.scheduler.console.print_error("Deleting task from database unsuccessful")
            return False
        return True

    def convert_to_reminder(self, task_id: int, reminders: ReminderController) -> Optional[int]:
        """Create a one-off reminder at the task's deadline."""

        task = self.get(task_id)
        if task is None:
            self.scheduler.console.print_error(f"Task {task_id} not found")
            return None
        reminder = Reminder(
            title=TASK_TITLE,
            description=task.description,
            added_time=task.added_time,
            event_time=task.deadline,
            sound=task.sound,
            repeat_pattern=RepeatPattern.NEVER,
            ring_offsets=set(reminders.settings.default_ring_offsets),
        )
        return reminders.add(reminder)
