"""Engine settings and logging configuration helpers."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from functools import lru_cache
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Notifications are bucketed per minute; a shorter snooze would land in the
# bucket being delivered.
MIN_SNOOZE_SECONDS = 60.0

_TRUTHY = {"1", "true", "yes", "on"}


def _to_float(value, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


def _to_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw in (None, ""):
        return None
    return _to_float(raw, name)


def _env_bool(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw in (None, ""):
        return None
    return _to_bool(raw)


@dataclass
class Settings:
    """Runtime configuration resolved from environment variables."""

    poll_interval_seconds: float = 1.0
    snooze_seconds: float = 600.0
    default_ring_offsets: set[float] = field(default_factory=lambda: {1800.0})
    default_event_delay_seconds: float = 3600.0
    reminder_title: str = "Reminder"
    reminder_description: str = "Your description goes here..."
    reminder_sound: str = "sound.wav"
    task_sound: str = "alert_sound.wav"
    interactive_responses: bool = False
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    def __post_init__(self) -> None:
        poll = _env_float("REMINDER_POLL_INTERVAL")
        snooze = _env_float("REMINDER_SNOOZE_SECONDS")
        interactive = _env_bool("REMINDER_INTERACTIVE")
        offsets = os.getenv("REMINDER_RING_OFFSETS")
        if poll is not None:
            self.poll_interval_seconds = poll
        if snooze is not None:
            self.snooze_seconds = snooze
        if interactive is not None:
            self.interactive_responses = interactive
        if offsets:
            self.default_ring_offsets = {float(v) for v in offsets.split(",") if v.strip()}
        self.reminder_sound = os.getenv("REMINDER_SOUND", self.reminder_sound)
        self.task_sound = os.getenv("REMINDER_TASK_SOUND", self.task_sound)
        self.log_level = os.getenv("REMINDER_LOG_LEVEL", self.log_level)
        self.log_dir = os.getenv("REMINDER_LOG_DIR", self.log_dir)
        self._validate()

    def _validate(self) -> None:
        self.default_ring_offsets = {float(v) for v in self.default_ring_offsets}
        if any(v < 0 for v in self.default_ring_offsets):
            raise ValueError("default_ring_offsets must not be negative")
        if self.poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be positive")
        if self.snooze_seconds < MIN_SNOOZE_SECONDS:
            raise ValueError(f"snooze_seconds must be at least {MIN_SNOOZE_SECONDS:g}")

    @classmethod
    def from_file(cls, path: str | Path) -> Settings:
        """Overlay a saved JSON defaults file on top of the environment."""

        with open(path, encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, dict):
            raise ValueError("Defaults file must contain a JSON object")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ValueError(f"Unknown settings in defaults file: {unknown}")

        settings = cls()
        for f in fields(cls):
            if f.name in payload:
                setattr(settings, f.name, _coerce(f.name, f.type, payload[f.name]))
        settings._validate()
        return settings

    def to_file(self, path: str | Path) -> None:
        payload = asdict(self)
        payload["default_ring_offsets"] = sorted(self.default_ring_offsets)
        Path(path).write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _coerce(name: str, annotation: str, value):
    """Convert a raw JSON value to the type declared on the Settings field."""

    if annotation == "float":
        return _to_float(value, name)
    if annotation == "bool":
        return _to_bool(value)
    if annotation == "set[float]":
        if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
            raise ValueError(f"{name} must be a list of numbers, got {value!r}")
        return {_to_float(v, name) for v in value}
    if value is None:
        if annotation.startswith("Optional"):
            return None
        raise ValueError(f"{name} must not be null")
    return str(value)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging once for the CLI entry points."""

    settings = settings or get_settings()
    handlers: list[logging.Handler] = []
    if settings.log_dir:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / "reminder_engine.log", mode="a"))
    else:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )
