"""Keyed in-memory persistence for reminders and tasks."""

from __future__ import annotations

import copy
import logging
import threading
from typing import Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InMemoryRepository(Generic[T]):
    """Store records under sequential integer ids starting at 1.

    Records are copied on the way in and out so callers cannot mutate stored
    state behind the repository's back. Deleted ids are never reused.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._rows: dict[int, T] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, element: T) -> int:
        with self._lock:
            new_id = self._next_id
            self._next_id += 1
            stored = copy.deepcopy(element)
            if hasattr(stored, "id"):
                stored.id = new_id
            self._rows[new_id] = stored
        logger.debug("%s: created id %s", self.name, new_id)
        return new_id

    def retrieve(self, id: int) -> Optional[T]:
        with self._lock:
            row = self._rows.get(id)
            return copy.deepcopy(row) if row is not None else None

    def update(self, id: int, element: T) -> bool:
        with self._lock:
            if id not in self._rows:
                logger.error("%s: failure in updating id %s - not found", self.name, id)
                return False
            stored = copy.deepcopy(element)
            if hasattr(stored, "id"):
                stored.id = id
            self._rows[id] = stored
            return True

    def delete(self, id: int) -> bool:
        with self._lock:
            if self._rows.pop(id, None) is None:
                logger.error("%s: failure in deleting id %s - not found", self.name, id)
                return False
            return True

    def all(self) -> list[T]:
        with self._lock:
            return [copy.deepcopy(row) for _, row in sorted(self._rows.items())]

    def __len__(self) -> int:
        return len(self._rows)
