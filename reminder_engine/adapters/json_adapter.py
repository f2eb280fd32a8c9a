"""JSON adapter for reminder and task seed files."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Optional, Union

from reminder_engine.schema import Reminder, RepeatPattern, Task

Record = Union[Reminder, Task]

_REQUIRED_FIELDS = {
    "reminder": {"title", "event_time"},
    "task": {"description", "deadline"},
}


def _parse_time(value, label: str, field: str) -> datetime:
    """Parse an ISO timestamp; offset-bearing values become naive local time."""

    try:
        parsed = datetime.fromisoformat(str(value).strip())
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"{label}: malformed {field}") from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _parse_offsets(value, label: str) -> set[float]:
    if value in (None, ""):
        return set()
    if isinstance(value, str):
        value = [v for v in value.split(";") if v.strip()]
    try:
        offsets = {float(v) for v in value}
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"{label}: invalid ring_offsets") from exc
    if any(v < 0 for v in offsets):
        raise ValueError(f"{label}: ring_offsets must not be negative")
    return offsets


def build_record(item: dict, label: str, now: Optional[datetime] = None) -> Record:
    """Validate one raw mapping and build a Reminder or Task from it."""

    kind = str(item.get("type") or "").strip().lower()
    if kind not in _REQUIRED_FIELDS:
        raise ValueError(f"{label}: invalid type '{kind}'")

    missing = sorted(field for field in _REQUIRED_FIELDS[kind] if not item.get(field))
    if missing:
        raise ValueError(f"{label}: missing required fields {missing}")

    added_raw = item.get("added_time")
    added_time = _parse_time(added_raw, label, "added_time") if added_raw else (now or datetime.now())
    sound = str(item.get("sound") or "").strip()

    if kind == "task":
        return Task(
            description=str(item["description"]).strip(),
            added_time=added_time,
            deadline=_parse_time(item["deadline"], label, "deadline"),
            sound=sound,
        )

    return Reminder(
        title=str(item["title"]).strip(),
        description=str(item.get("description") or "").strip(),
        added_time=added_time,
        event_time=_parse_time(item["event_time"], label, "event_time"),
        sound=sound,
        repeat_pattern=RepeatPattern.parse(item.get("repeat")),
        ring_offsets=_parse_offsets(item.get("ring_offsets"), label),
    )


def parse(file_path: str, now: Optional[datetime] = None) -> list[Record]:
    """Parse JSON file into reminder and task records."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    records = []
    for i, item in enumerate(payload, start=1):
        if not isinstance(item, dict):
            raise ValueError(f"Item {i}: expected an object")
        records.append(build_record(item, f"Item {i}", now))
    return records
