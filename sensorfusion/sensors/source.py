"""
Sample delivery port between a sensor platform and the fusion engine.
"""

import logging
import threading
from typing import Callable, Iterable, List

from .samples import SensorSample

logger = logging.getLogger(__name__)

SampleCallback = Callable[[SensorSample], None]


class SampleSource:
    """
    Delivers sensor samples to subscribed callbacks.

    Platform adapters (I2C drivers, serial readers, log replays) call
    :meth:`emit` for every reading; the engine subscribes while running.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._callbacks: List[SampleCallback] = []

    def subscribe(self, callback: SampleCallback) -> None:
        with self._lock:
            if callback not in self._callbacks:
                self._callbacks.append(callback)

    def unsubscribe(self, callback: SampleCallback) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def emit(self, sample: SensorSample) -> None:
        """Deliver one sample to every current subscriber."""
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback(sample)


class ReplaySource(SampleSource):
    """Source that replays a recorded sequence of samples on demand."""

    def __init__(self, samples: Iterable[SensorSample]):
        super().__init__()
        self.samples = list(samples)

    def replay(self) -> int:
        """
        Emit all recorded samples in order.

        Returns:
            Number of samples emitted
        """
        for sample in self.samples:
            self.emit(sample)
        logger.debug("Replayed %d samples", len(self.samples))
        return len(self.samples)
