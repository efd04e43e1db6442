"""
Fixed-rate periodic task runner for the complementary fuser.
"""

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class FixedRateScheduler:
    """
    Runs a task at a fixed rate on a background daemon thread.

    Deadlines advance by exactly one period per run, so a slow tick does not
    shift the schedule. The worker sleeps on an event, which also wakes it
    immediately on :meth:`cancel`.
    """

    def __init__(self, task: Callable[[], None], period_s: float,
                 initial_delay_s: float = 0.0, name: str = "fusion-timer"):
        if period_s <= 0:
            raise ValueError(f"period must be positive, got {period_s}")
        self.task = task
        self.period_s = period_s
        self.initial_delay_s = max(0.0, initial_delay_s)
        self.name = name

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.run_count = 0
        self.error_count = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.debug("%s started (period %.3fs)", self.name, self.period_s)

    def cancel(self, timeout: Optional[float] = 2.0) -> None:
        """Stop scheduling; waits for a tick in progress to finish."""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)
        self._thread = None
        logger.debug("%s cancelled after %d runs", self.name, self.run_count)

    def _run(self) -> None:
        next_run = time.monotonic() + self.initial_delay_s
        while not self._stop_event.wait(max(0.0, next_run - time.monotonic())):
            try:
                self.task()
            except Exception:
                self.error_count += 1
                logger.exception("%s task failed", self.name)
            self.run_count += 1
            next_run += self.period_s
