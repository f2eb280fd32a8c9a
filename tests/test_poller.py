from datetime import timedelta

import pytest

from conftest import START
from reminder_engine import poller as poller_module
from reminder_engine.poller import BackgroundPoller, start_background_polling
from reminder_engine.schema import DeliveryOutcome, Reminder, RepeatPattern


@pytest.fixture(autouse=True)
def reset_background_flag():
    poller_module._reset_for_tests()
    yield
    poller_module._reset_for_tests()


def schedule_reminder(reminder_store, scheduler, event_time):
    reminder = Reminder(
        title="Take medicine",
        description="",
        added_time=START,
        event_time=event_time,
        sound="sound.wav",
        repeat_pattern=RepeatPattern.NEVER,
    )
    reminder.id = reminder_store.create(reminder)
    scheduler.push_reminder(reminder)
    return reminder


def test_tick_without_due_notification_does_nothing(scheduler, handler, settings):
    poller = BackgroundPoller(scheduler, handler, settings=settings)
    assert poller.tick() is None
    assert poller.history == []


def test_tick_delivers_due_notification(scheduler, handler, settings, reminder_store, clock):
    event = START + timedelta(minutes=3)
    schedule_reminder(reminder_store, scheduler, event)
    poller = BackgroundPoller(scheduler, handler, settings=settings)

    assert poller.tick() is None
    clock.now = event + timedelta(seconds=30)
    result = poller.tick()

    assert result.outcome is DeliveryOutcome.DELIVERED
    assert poller.history == [result]
    assert scheduler.pending() == []
    assert poller.tick() is None


def test_failed_sound_prints_error_line(scheduler, handler, settings, reminder_store, clock, player, presenter):
    event = START + timedelta(minutes=3)
    schedule_reminder(reminder_store, scheduler, event)
    player.succeed = False
    clock.now = event
    poller = BackgroundPoller(scheduler, handler, settings=settings)

    poller.tick()

    assert len(presenter.errors) == 1
    assert presenter.errors[0].startswith("Failed to notify!")
    assert "Take medicine" in presenter.errors[0]


def test_loop_survives_delivery_errors(scheduler, settings, reminder_store, clock):
    event = START + timedelta(minutes=3)
    schedule_reminder(reminder_store, scheduler, event)
    clock.now = event

    class ExplodingHandler:
        calls = 0

        def deliver(self, notification):
            ExplodingHandler.calls += 1
            raise RuntimeError("boom")

    sleeps = []

    def fake_sleep(seconds):
        sleeps.append(seconds)
        if len(sleeps) == 2:
            poller.running = False

    poller = BackgroundPoller(scheduler, ExplodingHandler(), settings=settings, sleep=fake_sleep)
    poller.running = True
    poller._loop()

    assert ExplodingHandler.calls == 2
    assert sleeps == [settings.poll_interval_seconds] * 2


def test_start_is_idempotent(scheduler, handler, settings):
    poller = BackgroundPoller(scheduler, handler, settings=settings, sleep=lambda seconds: poller.stop())

    assert poller.start() is True
    assert poller.start() is False
    poller._thread.join(timeout=2)
    assert not poller.is_alive


def test_background_polling_starts_once_per_process(scheduler, handler, settings):
    first = BackgroundPoller(scheduler, handler, settings=settings, sleep=lambda seconds: first.stop())
    second = BackgroundPoller(scheduler, handler, settings=settings)

    assert start_background_polling(first) is True
    assert start_background_polling(second) is False
    assert second.is_alive is False
    first._thread.join(timeout=2)


def test_failed_delivery_is_not_repeated_within_the_minute(scheduler, handler, settings, reminder_store, clock, player):
    event = START + timedelta(minutes=3)
    schedule_reminder(reminder_store, scheduler, event)
    clock.now = event

    class ClosedConsole:
        def get_response(self, notification):
            raise RuntimeError("console closed")

    handler.responder = ClosedConsole()
    ticks = []

    def fake_sleep(seconds):
        ticks.append(seconds)
        clock.advance(seconds=1)
        if len(ticks) == 3:
            poller.running = False

    poller = BackgroundPoller(scheduler, handler, settings=settings, sleep=fake_sleep)
    poller.running = True
    poller._loop()

    assert len(ticks) == 3
    assert player.played == ["sound.wav"]
    assert scheduler.pending() == []
