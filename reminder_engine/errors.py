"""Scheduler error taxonomy."""

from __future__ import annotations


class SchedulerError(Exception):
    pass


class AlreadyScheduled(SchedulerError):
    """A notification already occupies the target bucket."""

    def __init__(self, bucket, existing=None) -> None:
        super().__init__(f"Notification already exists for {bucket}")
        self.bucket = bucket
        self.existing = existing


class NotFound(SchedulerError):
    """No notification occupies the bucket being removed."""

    def __init__(self, bucket) -> None:
        super().__init__(f"Notification does not exist for {bucket}")
        self.bucket = bucket


class DeliveryFailure(SchedulerError):
    def __init__(self, notification) -> None:
        super().__init__(
            f"Failed to notify! \ntitle: {notification.title} \nsubtitle: {notification.subtitle}"
        )
        self.notification = notification


class InvalidEventTime(ValueError):
    pass
