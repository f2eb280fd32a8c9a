"""Shared fakes for the engine tests."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from reminder_engine.adapters.memory_store import InMemoryRepository
from reminder_engine.config import Settings
from reminder_engine.delivery import DeliveryHandler
from reminder_engine.scheduler import Scheduler
from reminder_engine.schema import NotificationResponse

START = datetime(2025, 1, 1, 9, 0, 0)


class FakeClock:
    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class RecordingPresenter:
    def __init__(self) -> None:
        self.rendered = []
        self.viewed = []
        self.errors = []

    def render(self, title, subtitle, body, time) -> None:
        self.rendered.append((title, subtitle, body, time))

    def render_entity(self, kind, id) -> None:
        self.viewed.append((kind, id))

    def print_error(self, message) -> None:
        self.errors.append(str(message))


class FakePlayer:
    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.played = []

    def play(self, sound_ref: str) -> bool:
        self.played.append(sound_ref)
        return self.succeed


class ScriptedResponder:
    def __init__(self, response: NotificationResponse = NotificationResponse.ACKNOWLEDGE) -> None:
        self.response = response
        self.asked = []

    def get_response(self, notification) -> NotificationResponse:
        self.asked.append(notification)
        return self.response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings(monkeypatch):
    for name in (
        "REMINDER_POLL_INTERVAL",
        "REMINDER_SNOOZE_SECONDS",
        "REMINDER_INTERACTIVE",
        "REMINDER_RING_OFFSETS",
        "REMINDER_SOUND",
        "REMINDER_TASK_SOUND",
        "REMINDER_LOG_LEVEL",
        "REMINDER_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    return Settings()


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def scheduler(clock, presenter):
    return Scheduler(clock=clock, console=presenter)


@pytest.fixture
def reminder_store():
    return InMemoryRepository("Reminder")


@pytest.fixture
def task_store():
    return InMemoryRepository("Task")


@pytest.fixture
def player():
    return FakePlayer()


@pytest.fixture
def responder():
    return ScriptedResponder()


@pytest.fixture
def handler(scheduler, reminder_store, task_store, presenter, player, responder, settings, clock):
    return DeliveryHandler(
        scheduler,
        reminder_store,
        task_store,
        presenter,
        player,
        responder,
        settings=settings,
        clock=clock,
    )
