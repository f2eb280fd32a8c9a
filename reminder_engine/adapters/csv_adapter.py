"""CSV adapter for reminder and task seed files."""

from __future__ import annotations

import csv
from datetime import datetime
from typing import Optional

from reminder_engine.adapters.json_adapter import Record, build_record


def parse(file_path: str, now: Optional[datetime] = None) -> list[Record]:
    """Parse CSV file into reminder and task records.

    Columns: type, title, description, event_time, deadline, added_time,
    sound, repeat, ring_offsets (semicolon separated seconds).
    """

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        records: list[Record] = []
        for row_number, row in enumerate(reader, start=2):
            cleaned = {key: value for key, value in row.items() if key and value not in (None, "")}
            records.append(build_record(cleaned, f"Row {row_number}", now))
        return records
