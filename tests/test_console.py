import io
from datetime import datetime

from reminder_engine.adapters.memory_store import InMemoryRepository
from reminder_engine.console import AutoAcknowledge, ConsolePresenter, ConsoleResponder
from reminder_engine.schema import NotificationKind, NotificationResponse, Task


def test_print_error_uses_fixed_prefix():
    stream = io.StringIO()
    ConsolePresenter(stream=stream).print_error("disk full")
    assert stream.getvalue() == "\tERROR: disk full\n"


def test_render_prints_alert_fields():
    stream = io.StringIO()
    ConsolePresenter(stream=stream).render("Reminder", "Gym", "Leg day", datetime(2025, 1, 2, 18, 0))
    output = stream.getvalue()
    assert "Reminder\n" in output
    assert "Gym\n" in output
    assert "Leg day\n" in output
    assert "2025-01-02 18:00" in output


def test_render_entity_shows_task_or_error():
    tasks = InMemoryRepository("Task")
    task_id = tasks.create(Task("Pay rent", datetime(2025, 1, 1), datetime(2025, 1, 5, 12, 0), "alert.wav"))
    stream = io.StringIO()
    presenter = ConsolePresenter(stream=stream, tasks=tasks)

    presenter.render_entity(NotificationKind.TASK, task_id)
    presenter.render_entity(NotificationKind.REMINDER, 7)

    output = stream.getvalue()
    assert "Description: Pay rent" in output
    assert "Deadline: 2025-01-05 12:00" in output
    assert "ERROR: Failed to retrieve reminder 7" in output


def test_console_responder_accepts_numbers_and_names():
    presenter = ConsolePresenter(stream=io.StringIO())
    answers = iter(["2", "view"])
    responder = ConsoleResponder(presenter, read=lambda prompt: next(answers))
    assert responder.get_response(None) is NotificationResponse.SNOOZE
    assert responder.get_response(None) is NotificationResponse.VIEW


def test_console_responder_falls_back_to_acknowledge():
    stream = io.StringIO()
    presenter = ConsolePresenter(stream=stream)
    answers = iter(["9", "later"])

    def read(prompt):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    responder = ConsoleResponder(presenter, read=read)
    assert responder.get_response(None) is NotificationResponse.ACKNOWLEDGE
    assert stream.getvalue().count("ERROR: Invalid input") == 2


def test_auto_acknowledge():
    assert AutoAcknowledge().get_response(None) is NotificationResponse.ACKNOWLEDGE
