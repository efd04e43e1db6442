"""
Raw sensor samples and the latest-value store fed by the sample source.
"""

import threading
import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class SensorKind(Enum):
    """Motion sensors consumed by the fusion engine."""

    ACCELEROMETER = "accelerometer"
    MAGNETIC_FIELD = "magnetic_field"
    GYROSCOPE = "gyroscope"


@dataclass(frozen=True)
class SensorSample:
    """
    A single timestamped reading of one motion sensor.

    Units follow the delivering platform: accelerometer in m/s^2, magnetic
    field in uT and gyroscope in rad/s. Only vector directions and the
    gyroscope magnitude matter to the engine.
    """

    kind: SensorKind
    values: Tuple[float, float, float]
    timestamp_ns: int

    def __post_init__(self):
        values = tuple(float(v) for v in self.values)
        if len(values) != 3:
            raise ValueError(
                f"{self.kind.value} sample needs 3 values, got {len(values)}")
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "timestamp_ns", int(self.timestamp_ns))

    @property
    def vector(self) -> np.ndarray:
        """Get sample values as numpy array."""
        return np.array(self.values)


class SampleIngest:
    """
    Keeps the most recent sample of every sensor kind.

    New readings overwrite the previous one of the same kind; no history is
    kept.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._latest: Dict[SensorKind, SensorSample] = {}
        self.sample_count = 0

    def store(self, sample: SensorSample) -> None:
        """Store a sample, replacing the previous one of its kind."""
        with self._lock:
            self._latest[sample.kind] = sample
            self.sample_count += 1

    def latest(self, kind: SensorKind) -> Optional[SensorSample]:
        """Latest sample of a kind, or None if none arrived yet."""
        with self._lock:
            return self._latest.get(kind)

    def vector(self, kind: SensorKind) -> Optional[np.ndarray]:
        sample = self.latest(kind)
        return sample.vector if sample is not None else None

    def has(self, kind: SensorKind) -> bool:
        with self._lock:
            return kind in self._latest

    def clear(self) -> None:
        with self._lock:
            self._latest.clear()
