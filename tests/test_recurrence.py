from datetime import datetime, timedelta

from reminder_engine.recurrence import next_fire_time
from reminder_engine.schema import RepeatPattern


def test_fixed_steps():
    now = datetime(2025, 3, 10, 8, 15, 30)
    assert next_fire_time(RepeatPattern.EVERY_MINUTE, now) == now + timedelta(minutes=1)
    assert next_fire_time(RepeatPattern.EVERY_DAY, now) == now + timedelta(days=1)
    assert next_fire_time(RepeatPattern.EVERY_WEEK, now) == now + timedelta(days=7)


def test_calendar_steps_clamp_to_month_end():
    assert next_fire_time(RepeatPattern.EVERY_MONTH, datetime(2025, 1, 31, 9, 0)) == datetime(2025, 2, 28, 9, 0)
    assert next_fire_time(RepeatPattern.EVERY_YEAR, datetime(2024, 2, 29, 9, 0)) == datetime(2025, 2, 28, 9, 0)


def test_never_and_unknown_do_not_repeat():
    now = datetime(2025, 3, 10, 8, 0)
    assert next_fire_time(RepeatPattern.NEVER, now) is None
    assert next_fire_time("fortnightly", now) is None


def test_pattern_names_are_parsed():
    assert RepeatPattern.parse("everyWeek") is RepeatPattern.EVERY_WEEK
    assert RepeatPattern.parse("monthly") is RepeatPattern.EVERY_MONTH
    assert RepeatPattern.parse("every-day") is RepeatPattern.EVERY_DAY
    assert RepeatPattern.parse(None) is RepeatPattern.NEVER
