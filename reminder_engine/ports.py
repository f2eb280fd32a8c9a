"""Collaborator interfaces the engine calls out to."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from reminder_engine.schema import (
    Notification,
    NotificationKind,
    NotificationResponse,
    Reminder,
    Task,
)


class ReminderRepository(Protocol):
    def retrieve(self, id: int) -> Optional[Reminder]:
        """Return the stored reminder or None when it was deleted."""


class TaskRepository(Protocol):
    def retrieve(self, id: int) -> Optional[Task]:
        """Return the stored task or None when it was deleted."""


class Presenter(Protocol):
    """Port for rendering alerts and error lines."""

    def render(self, title: str, subtitle: str, body: str, time: datetime) -> None:
        ...

    def render_entity(self, kind: NotificationKind, id: int) -> None:
        ...

    def print_error(self, message: object) -> None:
        ...


class AudioPlayer(Protocol):
    def play(self, sound_ref: str) -> bool:
        """Play the sound synchronously and report whether it played."""


class ResponseSource(Protocol):
    def get_response(self, notification: Notification) -> NotificationResponse:
        """Return how the user answered a delivered alert."""
