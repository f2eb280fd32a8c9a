"""Background loop that fires due notifications."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from reminder_engine.config import Settings, get_settings
from reminder_engine.delivery import DeliveryHandler
from reminder_engine.errors import DeliveryFailure
from reminder_engine.scheduler import Clock, Scheduler
from reminder_engine.schema import DeliveryResult

logger = logging.getLogger(__name__)

_started_lock = threading.Lock()
_background_started = False


class BackgroundPoller:
    """Check the current minute bucket once per tick and deliver what is due.

    Delivery runs synchronously on the poller thread, so a slow sound or a
    waiting prompt delays the next tick.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        handler: DeliveryHandler,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.scheduler = scheduler
        self.handler = handler
        self.settings = settings or get_settings()
        self.clock = clock or scheduler.clock
        self.sleep = sleep
        self.history: list[DeliveryResult] = []
        self.running = False
        self._thread: Optional[threading.Thread] = None

    def tick(self) -> Optional[DeliveryResult]:
        """Run one poll: deliver the notification due this minute, if any."""

        notification = self.scheduler.due(self.clock())
        if notification is None:
            return None

        result = self.handler.deliver(notification)
        self.history.append(result)
        if not result.success:
            self.handler.presenter.print_error(DeliveryFailure(notification))
        return result

    def _loop(self) -> None:
        logger.info("Notification poller started (every %ss)", self.settings.poll_interval_seconds)
        while self.running:
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Notification poller error: {e}")
            try:
                self.sleep(self.settings.poll_interval_seconds)
            except InterruptedError:
                pass
        logger.info("Notification poller stopped")

    def start(self) -> bool:
        """Start the daemon thread; later calls are no-ops."""

        if self._thread is not None:
            return False
        self.running = True
        self._thread = threading.Thread(target=self._loop, name="notification-poller", daemon=True)
        self._thread.start()
        return True

    def stop(self, timeout: Optional[float] = None) -> None:
        self.running = False
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()


def start_background_polling(poller: BackgroundPoller) -> bool:
    """Start ``poller`` unless a poller was already started in this process."""

    global _background_started
    with _started_lock:
        if _background_started:
            logger.debug("Background polling already started")
            return False
        _background_started = True
    return poller.start()


def _reset_for_tests() -> None:
    global _background_started
    with _started_lock:
        _background_started = False
