"""Core data schema for reminders, tasks and notifications."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from reminder_engine.bucket import TimeBucket

REMINDER_TITLE = "Reminder"
TASK_TITLE = "Task"


class NotificationKind(str, Enum):
    REMINDER = "reminder"
    TASK = "task"


class RepeatPattern(str, Enum):
    """How often a reminder repeats after it rings."""

    NEVER = "never"
    EVERY_MINUTE = "every_minute"
    EVERY_DAY = "every_day"
    EVERY_WEEK = "every_week"
    EVERY_MONTH = "every_month"
    EVERY_YEAR = "every_year"

    @classmethod
    def parse(cls, value: Optional[str]) -> RepeatPattern:
        """Parse a pattern name, falling back to NEVER for unknown values."""

        if isinstance(value, RepeatPattern):
            return value
        if not value:
            return cls.NEVER
        normalized = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        aliases = {
            "everyminute": "every_minute",
            "everyday": "every_day",
            "everyweek": "every_week",
            "everymonth": "every_month",
            "everyyear": "every_year",
            "daily": "every_day",
            "weekly": "every_week",
            "monthly": "every_month",
            "yearly": "every_year",
        }
        normalized = aliases.get(normalized.replace("_", ""), normalized)
        try:
            return cls(normalized)
        except ValueError:
            return cls.NEVER

    @property
    def repeats(self) -> bool:
        return self is not RepeatPattern.NEVER


class NotificationResponse(str, Enum):
    ACKNOWLEDGE = "acknowledge"
    SNOOZE = "snooze"
    VIEW = "view"


class DeliveryOutcome(str, Enum):
    DELIVERED = "delivered"
    REQUEUED_RECURRENCE = "requeued_recurrence"
    REQUEUED_SNOOZE = "requeued_snooze"
    SUPPRESSED_STALE = "suppressed_stale"
    SUPPRESSED_DELETED = "suppressed_deleted"


@dataclass
class Reminder:
    """Time-based reminder record owned by the persistence layer."""

    title: str
    description: str
    added_time: datetime
    event_time: datetime
    sound: str
    repeat_pattern: RepeatPattern = RepeatPattern.NEVER
    ring_offsets: set[float] = field(default_factory=set)
    id: Optional[int] = None

    def ring_times(self) -> list[datetime]:
        """Event time first, then one time per ring offset, nearest first."""

        times = [self.event_time]
        for offset in sorted(self.ring_offsets):
            times.append(self.event_time - timedelta(seconds=offset))
        return times


@dataclass
class Task:
    """Deadline-based task record owned by the persistence layer."""

    description: str
    added_time: datetime
    deadline: datetime
    sound: str
    id: Optional[int] = None


@dataclass(frozen=True)
class Notification:
    """Schedulable unit stored under the bucket of its fire time."""

    kind: NotificationKind
    subject_id: int
    title: str
    subtitle: str
    body: str
    sound_ref: str
    fire_time: datetime
    origin_snapshot_time: datetime

    @property
    def bucket(self) -> TimeBucket:
        return TimeBucket.from_timestamp(self.fire_time)

    def rescheduled(self, fire_time: datetime) -> Notification:
        return replace(self, fire_time=fire_time)

    @classmethod
    def for_reminder(cls, reminder: Reminder, fire_time: datetime) -> Notification:
        return cls(
            kind=NotificationKind.REMINDER,
            subject_id=reminder.id,
            title=REMINDER_TITLE,
            subtitle=reminder.title,
            body=reminder.description,
            sound_ref=reminder.sound,
            fire_time=fire_time,
            origin_snapshot_time=reminder.added_time,
        )

    @classmethod
    def for_task(cls, task: Task) -> Notification:
        return cls(
            kind=NotificationKind.TASK,
            subject_id=task.id,
            title=TASK_TITLE,
            subtitle=task.description,
            body=f"Deadline: {task.deadline:%Y-%m-%d %H:%M}",
            sound_ref=task.sound,
            fire_time=task.deadline,
            origin_snapshot_time=task.added_time,
        )


@dataclass
class DeliveryResult:
    """What happened to one due notification."""

    notification: Notification
    outcome: DeliveryOutcome
    success: bool
    delivered_at: datetime
    response: Optional[NotificationResponse] = None
    next_fire_time: Optional[datetime] = None
    recurrence_time: Optional[datetime] = None
    snooze_time: Optional[datetime] = None
