"""Schedule reminders/tasks from a CSV/JSON file and run the notification poller."""

from __future__ import annotations

import argparse
import json
import logging
import signal
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from reminder_engine.adapters import csv_adapter, json_adapter
from reminder_engine.app import build_engine
from reminder_engine.config import Settings, configure_logging
from reminder_engine.metrics import compute_metrics
from reminder_engine.schema import Reminder

logger = logging.getLogger("run_scheduler")


def _load_records(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the reminder notification scheduler")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON reminders and tasks file")
    parser.add_argument("--defaults", help="Path to a JSON defaults file")
    parser.add_argument("--sound-dir", help="Directory for relative sound references")
    parser.add_argument("--interactive", action="store_true", help="Prompt for a response on each alert")
    args = parser.parse_args()

    settings = Settings.from_file(args.defaults) if args.defaults else Settings()
    if args.interactive:
        settings.interactive_responses = True
    configure_logging(settings)

    engine = build_engine(settings=settings, sound_dir=args.sound_dir)
    for record in _load_records(Path(args.data)):
        if isinstance(record, Reminder):
            engine.reminders.add(record)
        else:
            engine.tasks.add(record)

    pending = engine.scheduler.pending()
    print(f"Scheduled {len(pending)} notification(s)")
    for notification in pending:
        print(f"  {notification.bucket}  {notification.title}: {notification.subtitle}")

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}")
        engine.poller.stop(timeout=0)

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    engine.start_background_polling()
    while engine.poller.running:
        time.sleep(settings.poll_interval_seconds)

    print(json.dumps(compute_metrics(engine.poller.history), indent=2))


if __name__ == "__main__":
    main()
