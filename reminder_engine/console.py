"""Console presentation and response collaborators."""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Callable, Optional, TextIO

from reminder_engine.ports import ReminderRepository, TaskRepository
from reminder_engine.schema import Notification, NotificationKind, NotificationResponse

RULE = "-" * 15
ERROR_PREFIX = "\tERROR: "


class ConsolePresenter:
    """Print alerts, entity views and error lines to a text stream."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        reminders: Optional[ReminderRepository] = None,
        tasks: Optional[TaskRepository] = None,
    ) -> None:
        self._stream = stream
        self.reminders = reminders
        self.tasks = tasks

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def _print(self, value: object = "") -> None:
        print(value, file=self.stream, flush=True)

    def print_line(self) -> None:
        self._print(RULE)

    def print_error(self, message: object) -> None:
        self._print(f"{ERROR_PREFIX}{message}")

    def render(self, title: str, subtitle: str, body: str, time: datetime) -> None:
        self.print_line()
        self.print_line()
        self._print(title)
        self.print_line()
        self._print(subtitle)
        self.print_line()
        self._print(body)
        self._print(f"{time:%Y-%m-%d %H:%M}")
        self.print_line()

    def render_entity(self, kind: NotificationKind, id: int) -> None:
        repository = self.reminders if kind is NotificationKind.REMINDER else self.tasks
        entity = repository.retrieve(id) if repository is not None else None
        if entity is None:
            self.print_error(f"Failed to retrieve {kind.value} {id}. Received a nil value.")
            return

        self.print_line()
        if kind is NotificationKind.REMINDER:
            self._print("Reminder")
            self.print_line()
            self._print(f"Title: {entity.title}")
            self._print(f"Description: {entity.description}")
            self._print(f"Event time: {entity.event_time:%Y-%m-%d %H:%M}")
            self._print(f"Repeats: {entity.repeat_pattern.value}")
        else:
            self._print("Task")
            self.print_line()
            self._print(f"Description: {entity.description}")
            self._print(f"Deadline: {entity.deadline:%Y-%m-%d %H:%M}")
        self.print_line()


class AutoAcknowledge:
    """Answer every alert with ACKNOWLEDGE without touching stdin."""

    def get_response(self, notification: Notification) -> NotificationResponse:
        return NotificationResponse.ACKNOWLEDGE


class ConsoleResponder:
    """Blocking numbered prompt on stdin.

    The prompt runs on the poller thread and shares the console with any
    foreground prompt loop; answers may be read by whichever prompt is waiting.
    """

    def __init__(
        self,
        presenter: ConsolePresenter,
        read: Callable[[str], str] = input,
        max_attempts: int = 3,
    ) -> None:
        self.presenter = presenter
        self.read = read
        self.max_attempts = max_attempts

    def get_response(self, notification: Notification) -> NotificationResponse:
        options = list(NotificationResponse)
        menu = "\n".join(f"{i}. {option.value}" for i, option in enumerate(options, start=1))
        for _ in range(self.max_attempts):
            try:
                raw = self.read(f"Select options:\n{menu}\n")
            except EOFError:
                break
            raw = raw.strip().lower()
            if raw.isdigit() and 1 <= int(raw) <= len(options):
                return options[int(raw) - 1]
            for option in options:
                if raw == option.value:
                    return option
            self.presenter.print_error("Invalid input")
        return NotificationResponse.ACKNOWLEDGE
