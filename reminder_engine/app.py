"""Wiring of the scheduler, collaborators and background poller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TextIO

from reminder_engine.adapters.memory_store import InMemoryRepository
from reminder_engine.audio import WavPlayer
from reminder_engine.config import Settings, get_settings
from reminder_engine.console import AutoAcknowledge, ConsolePresenter, ConsoleResponder
from reminder_engine.controller import ReminderController, TaskController
from reminder_engine.delivery import DeliveryHandler
from reminder_engine.poller import BackgroundPoller, start_background_polling
from reminder_engine.ports import AudioPlayer, ResponseSource
from reminder_engine.scheduler import Clock, Scheduler
from reminder_engine.schema import Reminder, Task


@dataclass
class ReminderEngine:
    settings: Settings
    scheduler: Scheduler
    presenter: ConsolePresenter
    reminder_store: InMemoryRepository[Reminder]
    task_store: InMemoryRepository[Task]
    reminders: ReminderController
    tasks: TaskController
    handler: DeliveryHandler
    poller: BackgroundPoller

    def start_background_polling(self) -> bool:
        return start_background_polling(self.poller)


def build_engine(
    settings: Optional[Settings] = None,
    clock: Optional[Clock] = None,
    player: Optional[AudioPlayer] = None,
    responder: Optional[ResponseSource] = None,
    stream: Optional[TextIO] = None,
    sound_dir: Optional[str] = None,
) -> ReminderEngine:
    """Assemble an engine backed by in-memory storage and the console."""

    settings = settings or get_settings()
    reminder_store: InMemoryRepository[Reminder] = InMemoryRepository("Reminder")
    task_store: InMemoryRepository[Task] = InMemoryRepository("Task")
    presenter = ConsolePresenter(stream=stream, reminders=reminder_store, tasks=task_store)
    scheduler = Scheduler(clock=clock, console=presenter)

    if responder is None:
        responder = ConsoleResponder(presenter) if settings.interactive_responses else AutoAcknowledge()
    handler = DeliveryHandler(
        scheduler,
        reminder_store,
        task_store,
        presenter,
        player or WavPlayer(sound_dir),
        responder,
        settings=settings,
    )
    return ReminderEngine(
        settings=settings,
        scheduler=scheduler,
        presenter=presenter,
        reminder_store=reminder_store,
        task_store=task_store,
        reminders=ReminderController(reminder_store, scheduler, settings),
        tasks=TaskController(task_store, scheduler, settings),
        handler=handler,
        poller=BackgroundPoller(scheduler, handler, settings=settings),
    )
