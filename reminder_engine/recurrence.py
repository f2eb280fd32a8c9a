"""Recurrence expansion for repeating reminders."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from dateutil.relativedelta import relativedelta

from reminder_engine.schema import RepeatPattern

_STEPS = {
    RepeatPattern.EVERY_MINUTE: relativedelta(minutes=1),
    RepeatPattern.EVERY_DAY: relativedelta(days=1),
    RepeatPattern.EVERY_WEEK: relativedelta(days=7),
    RepeatPattern.EVERY_MONTH: relativedelta(months=1),
    RepeatPattern.EVERY_YEAR: relativedelta(years=1),
}


def next_fire_time(pattern: RepeatPattern, now: datetime) -> Optional[datetime]:
    """Return the next occurrence one calendar unit after ``now``.

    The anchor is the delivery moment, not the original fire time, so a late
    delivery shifts every later occurrence. Month and year steps clamp to the
    last day of a shorter month. Non-repeating patterns return None.
    """

    step = _STEPS.get(RepeatPattern.parse(pattern))
    if step is None:
        return None
    return now + step
