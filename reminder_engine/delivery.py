"""Delivery of due notifications."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from reminder_engine.config import Settings, get_settings
from reminder_engine.errors import AlreadyScheduled
from reminder_engine.ports import (
    AudioPlayer,
    Presenter,
    ReminderRepository,
    ResponseSource,
    TaskRepository,
)
from reminder_engine.recurrence import next_fire_time
from reminder_engine.scheduler import Clock, Scheduler
from reminder_engine.schema import (
    DeliveryOutcome,
    DeliveryResult,
    Notification,
    NotificationKind,
    NotificationResponse,
)

logger = logging.getLogger(__name__)


class DeliveryHandler:
    """Check a due notification against storage, alert, and apply the response.

    Every path ends with the delivered bucket cleared; recurrence and snooze
    leave a fresh entry under a later bucket.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        reminders: ReminderRepository,
        tasks: TaskRepository,
        presenter: Presenter,
        player: AudioPlayer,
        responder: ResponseSource,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.scheduler = scheduler
        self.reminders = reminders
        self.tasks = tasks
        self.presenter = presenter
        self.player = player
        self.responder = responder
        self.settings = settings or get_settings()
        self.clock = clock or scheduler.clock

    def deliver(self, notification: Notification) -> DeliveryResult:
        now = self.clock()
        subject = self._retrieve(notification)

        if subject is None:
            logger.info("Subject %s %s no longer exists; dropping notification", notification.kind.value, notification.subject_id)
            return self._suppress(notification, DeliveryOutcome.SUPPRESSED_DELETED, now)
        if subject.added_time != notification.origin_snapshot_time:
            logger.info("Subject %s %s changed since scheduling; dropping notification", notification.kind.value, notification.subject_id)
            return self._suppress(notification, DeliveryOutcome.SUPPRESSED_STALE, now)

        result = DeliveryResult(notification, DeliveryOutcome.DELIVERED, True, now)
        requeued: list[Notification] = []
        try:
            self._alert(notification, subject, result, requeued, now)
        finally:
            self._clear(notification, requeued)
        return result

    def _alert(
        self,
        notification: Notification,
        subject,
        result: DeliveryResult,
        requeued: list[Notification],
        now: datetime,
    ) -> None:
        if notification.kind is NotificationKind.REMINDER:
            next_time = next_fire_time(subject.repeat_pattern, now)
            if next_time is not None and self._requeue(notification, next_time, requeued):
                result.outcome = DeliveryOutcome.REQUEUED_RECURRENCE
                result.next_fire_time = result.recurrence_time = next_time

        if not self.player.play(notification.sound_ref):
            result.success = False
            logger.warning("Sound %r did not play for %s %s", notification.sound_ref, notification.kind.value, notification.subject_id)
        self.presenter.render(notification.title, notification.subtitle, notification.body, notification.fire_time)

        response = self.responder.get_response(notification)
        result.response = response
        if response is NotificationResponse.VIEW:
            self.presenter.render_entity(notification.kind, notification.subject_id)
        elif response is NotificationResponse.SNOOZE:
            snoozed = now + timedelta(seconds=self.settings.snooze_seconds)
            if self._requeue(notification, snoozed, requeued):
                result.outcome = DeliveryOutcome.REQUEUED_SNOOZE
                result.next_fire_time = result.snooze_time = snoozed

    def _clear(self, notification: Notification, requeued: list[Notification]) -> None:
        """Remove the delivered entry unless a requeue landed in its own bucket."""

        if any(moved.bucket == notification.bucket for moved in requeued):
            return
        if not self.scheduler.discard(notification) and not requeued:
            self.presenter.print_error("Error in deleting notification after notifying")
            logger.error("Delivered notification at %s was already removed", notification.bucket)

    def _retrieve(self, notification: Notification):
        if notification.kind is NotificationKind.REMINDER:
            return self.reminders.retrieve(notification.subject_id)
        return self.tasks.retrieve(notification.subject_id)

    def _suppress(self, notification: Notification, outcome: DeliveryOutcome, now: datetime) -> DeliveryResult:
        self.scheduler.discard(notification)
        return DeliveryResult(notification, outcome, True, now)

    def _requeue(self, notification: Notification, fire_time: datetime, requeued: list[Notification]) -> bool:
        try:
            requeued.append(self.scheduler.requeue(notification, fire_time))
        except AlreadyScheduled as exc:
            self.presenter.print_error(f"Unable to reschedule notification: {exc}")
            logger.error("Requeue of %s %s failed: %s", notification.kind.value, notification.subject_id, exc)
            return False
        return True
