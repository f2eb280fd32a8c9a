"""Demo script for reminder-engine."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from reminder_engine.app import build_engine
from reminder_engine.metrics import compute_metrics
from reminder_engine.schema import RepeatPattern


class SilentPlayer:
    def play(self, sound_ref: str) -> bool:
        return True


def main() -> None:
    engine = build_engine(player=SilentPlayer())
    now = datetime.now()

    reminder = engine.reminders.build(
        title="Stand-up",
        description="Daily team sync",
        event_time=now + timedelta(hours=1),
        repeat_pattern=RepeatPattern.EVERY_DAY,
        ring_offsets={1800, 600},
    )
    engine.reminders.add(reminder)
    engine.tasks.add(engine.tasks.build("Send invoice", deadline=now + timedelta(hours=3)))

    print("Pending:")
    for notification in engine.scheduler.pending():
        print(f"  {notification.bucket}  {notification.title}: {notification.subtitle}")

    # Deliver one stand-up alert as if its minute had arrived.
    due = engine.scheduler.pending()[1]
    result = engine.handler.deliver(due)
    print("Outcome:", result.outcome.value, "next:", result.next_fire_time)
    print("Metrics:", compute_metrics([result]))


if __name__ == "__main__":
    main()
